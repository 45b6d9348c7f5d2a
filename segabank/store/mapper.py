"""Row <-> domain object mapping for the ``compte``, ``operation`` and ``agence`` tables.

Rows are the dicts produced by psycopg's ``dict_row`` factory, keyed by the
lowercase column names. ``*_to_row`` functions return the named parameters
bound by the store statements.
"""

from typing import Any

from segabank.exceptions import UnknownAccountTypeError, UnknownOperationTypeError
from segabank.models import (
    Account,
    AccountType,
    Agency,
    FeeAccount,
    Operation,
    OperationType,
    SavingsAccount,
    SimpleAccount,
)

Row = dict[str, Any]


def to_account(row: Row) -> Account:
    """Build the account variant named by ``row["type"]``."""
    try:
        account_type = AccountType(row["type"])
    except ValueError as e:
        raise UnknownAccountTypeError(
            f"Unknown account type {row['type']!r} for account {row.get('id')}"
        ) from e

    common = {
        "account_id": row["id"],
        "agency_id": row["idagence"],
        "balance": row["solde"],
        "created_at": row["datecreation"],
    }
    if account_type is AccountType.SIMPLE:
        return SimpleAccount(**common, overdraft=_or_zero(row.get("decouvert")))
    if account_type is AccountType.SAVINGS:
        return SavingsAccount(**common, interest_rate=_or_zero(row.get("tauxinteret")))
    return FeeAccount(**common)


def to_row(account: Account) -> Row:
    """Bound parameters for the account insert/update statements."""
    row: Row = {
        "idagence": account.agency_id,
        "type": account.account_type.value,
        "solde": account.balance,
        "decouvert": None,
        "tauxinteret": None,
        "datecreation": account.created_at,
    }
    if isinstance(account, SimpleAccount):
        row["decouvert"] = account.overdraft
    elif isinstance(account, SavingsAccount):
        row["tauxinteret"] = account.interest_rate
    return row


def to_operation(row: Row) -> Operation:
    try:
        operation_type = OperationType(row["type"])
    except ValueError as e:
        raise UnknownOperationTypeError(
            f"Unknown operation type {row['type']!r} for operation {row.get('id')}"
        ) from e

    return Operation(
        operation_id=row["id"],
        account_id=row["idcompte"],
        operation_type=operation_type,
        amount=row["montant"],
        created_at=row["dateoperation"],
    )


def operation_to_row(operation: Operation) -> Row:
    return {
        "idcompte": operation.account_id,
        "type": operation.operation_type.value,
        "montant": operation.amount,
        "dateoperation": operation.created_at,
    }


def to_agency(row: Row) -> Agency:
    return Agency(agency_id=row["id"], code=row["code"], address=row["adresse"])


def agency_to_row(agency: Agency) -> Row:
    return {"code": agency.code, "adresse": agency.address}


def _or_zero(value: float | None) -> float:
    # NULL variant columns read back as 0.0
    return 0.0 if value is None else value

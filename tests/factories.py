"""Builders for domain objects and database rows used across tests."""

from datetime import datetime

from segabank.models import Operation, OperationType


def make_operation(operation_id: int, account_id: int, amount: float = 10.0) -> Operation:
    """Unrelated deposit operation with the given foreign key."""
    return Operation(
        operation_id=operation_id,
        account_id=account_id,
        operation_type=OperationType.DEPOSIT,
        amount=amount,
    )


def account_row(
    account_id: int = 1,
    account_type: str = "simple",
    agency_id: int = 10,
    balance: float = 100.0,
    overdraft: float | None = None,
    interest_rate: float | None = None,
    created: datetime | None = None,
) -> dict:
    """Row as produced by psycopg's ``dict_row`` for ``compte``."""
    return {
        "id": account_id,
        "idagence": agency_id,
        "type": account_type,
        "solde": balance,
        "decouvert": overdraft,
        "tauxinteret": interest_rate,
        "datecreation": created or datetime(2024, 1, 15, 12, 0),
    }


def operation_row(operation_id: int, account_id: int, operation_type: str = "depot", amount: float = 10.0) -> dict:
    """Row as produced by psycopg's ``dict_row`` for ``operation``."""
    return {
        "id": operation_id,
        "idcompte": account_id,
        "type": operation_type,
        "montant": amount,
        "dateoperation": datetime(2024, 2, 1, 8, 0),
    }

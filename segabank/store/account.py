"""Account persistence and account/operation relation management."""

from segabank.exceptions import EntityNotFoundError
from segabank.logging import get_logger, log_context
from segabank.models import Account, Operation
from segabank.store.base import BaseStore
from segabank.store.connection import ConnectionProvider
from segabank.store.mapper import to_account, to_row
from segabank.store.operation import OperationStore

logger = get_logger(__name__)

INSERT = (
    "INSERT INTO compte (idagence, type, solde, decouvert, tauxinteret, datecreation) "
    "VALUES (%(idagence)s, %(type)s, %(solde)s, %(decouvert)s, %(tauxinteret)s, "
    "COALESCE(%(datecreation)s, CURRENT_TIMESTAMP)) RETURNING id"
)
UPDATE = (
    "UPDATE compte SET idagence = %(idagence)s, type = %(type)s, solde = %(solde)s, "
    "decouvert = %(decouvert)s, tauxinteret = %(tauxinteret)s, "
    "datecreation = COALESCE(%(datecreation)s, datecreation) WHERE id = %(id)s"
)
DELETE = "DELETE FROM compte WHERE id = %s"
QUERY_ALL = "SELECT id, idagence, type, solde, decouvert, tauxinteret, datecreation FROM compte"
QUERY_ID = QUERY_ALL + " WHERE id = %s"
QUERY_CREATED_AT = "SELECT datecreation FROM compte WHERE id = %s"


class AccountStore(BaseStore):
    """CRUD over ``compte`` plus in-memory linking of accounts and operations.

    Parameters
    ----------
    provider : ConnectionProvider
        Source of scoped database connections.
    operation_store : OperationStore | None
        Store used by ``build_full`` to load operations. Defaults to an
        ``OperationStore`` on the same provider.
    """

    table = "compte"

    def __init__(
        self,
        provider: ConnectionProvider,
        operation_store: OperationStore | None = None,
    ) -> None:
        super().__init__(provider)
        self.operation_store = operation_store or OperationStore(provider)

    def create(self, account: Account) -> None:
        """Insert ``account`` and set its generated id and stored creation date."""
        self._require_new(account.account_id, "Account")
        with self._cursor() as cur:
            cur.execute(INSERT, to_row(account))
            account.account_id = cur.fetchone()["id"]
        logger.debug(
            "Created %s account", account.account_type.value,
            extra=log_context(self.table, account.account_id),
        )
        self._refresh_created_at(account)

    def update(self, account: Account) -> None:
        """Replace every stored field of ``account``, then re-read its creation date."""
        account_id = self._require_id(account.account_id, "Account")
        with self._cursor() as cur:
            cur.execute(UPDATE, {**to_row(account), "id": account_id})
            if cur.rowcount == 0:
                raise EntityNotFoundError(f"Account {account_id} not found")
        logger.debug("Updated account", extra=log_context(self.table, account_id))
        self._refresh_created_at(account)

    def delete(self, account: Account) -> None:
        """Delete the row of ``account``. Operations and relations are left alone."""
        account_id = self._require_id(account.account_id, "Account")
        with self._cursor() as cur:
            cur.execute(DELETE, (account_id,))
        logger.debug("Deleted account", extra=log_context(self.table, account_id))

    def find_by_id(self, account_id: int) -> Account | None:
        """Return the account with ``account_id``, or None."""
        with self._cursor() as cur:
            cur.execute(QUERY_ID, (account_id,))
            row = cur.fetchone()
        return to_account(row) if row is not None else None

    def get(self, account_id: int) -> Account:
        """Like ``find_by_id`` but raise EntityNotFoundError when missing."""
        account = self.find_by_id(account_id)
        if account is None:
            raise EntityNotFoundError(f"Account {account_id} not found")
        return account

    def find_all(self) -> list[Account]:
        """Return every account, without operations."""
        with self._cursor() as cur:
            cur.execute(QUERY_ALL)
            rows = cur.fetchall()
        return [to_account(row) for row in rows]

    def _refresh_created_at(self, account: Account) -> None:
        # The stored timestamp is authoritative over the client one
        with self._cursor() as cur:
            cur.execute(QUERY_CREATED_AT, (account.account_id,))
            row = cur.fetchone()
        if row is not None:
            account.created_at = row["datecreation"]

    # Relations
    def build_full(self) -> list[Account]:
        """Load all accounts and operations and link them both ways."""
        accounts = self.find_all()
        operations = self.operation_store.find_all()
        self.fill_relations(accounts, operations)
        logger.info(
            "Loaded %d accounts with %d operations", len(accounts), len(operations),
            extra=log_context(self.table, count=len(accounts)),
        )
        return accounts

    @staticmethod
    def fill_relations(accounts: list[Account], operations: list[Operation]) -> None:
        """Attach each operation to the account its foreign key names.

        Expects fresh objects: empty operation lists, unset back-references.
        Each account's list keeps the order of ``operations``.
        """
        for account in accounts:
            for operation in operations:
                if operation.account_id == account.account_id:
                    operation.account = account
                    account.operations.append(operation)

    @staticmethod
    def reconcile_relations(accounts: list[Account]) -> int:
        """Move operations whose foreign key changed to their new account.

        Only in-memory state changes; persisting the operation is up to the
        caller. An operation whose new foreign key matches none of
        ``accounts`` stays where it is.

        Returns
        -------
        int
            Number of operations moved.
        """
        # Snapshot the current ownership before anything moves
        previous = [
            (account, operation) for account in accounts for operation in account.operations
        ]

        moved = 0
        for candidate in accounts:
            for holder, operation in previous:
                owner = operation.account or holder
                if (
                    operation.account_id != owner.account_id
                    and operation.account_id == candidate.account_id
                ):
                    owner.operations.remove(operation)
                    candidate.operations.append(operation)
                    operation.account = candidate
                    moved += 1
        if moved:
            logger.debug(
                "Reconciled %d operation(s)", moved, extra=log_context("operation", count=moved)
            )
        return moved

"""Operation persistence."""

from segabank.exceptions import EntityNotFoundError
from segabank.logging import get_logger, log_context
from segabank.models import Operation
from segabank.store.base import BaseStore
from segabank.store.mapper import operation_to_row, to_operation

logger = get_logger(__name__)

INSERT = (
    "INSERT INTO operation (idcompte, type, montant, dateoperation) "
    "VALUES (%(idcompte)s, %(type)s, %(montant)s, "
    "COALESCE(%(dateoperation)s, CURRENT_TIMESTAMP)) RETURNING id, dateoperation"
)
UPDATE = (
    "UPDATE operation SET idcompte = %(idcompte)s, type = %(type)s, montant = %(montant)s, "
    "dateoperation = COALESCE(%(dateoperation)s, dateoperation) WHERE id = %(id)s"
)
DELETE = "DELETE FROM operation WHERE id = %s"
QUERY_ALL = "SELECT id, idcompte, type, montant, dateoperation FROM operation ORDER BY id"
QUERY_ID = "SELECT id, idcompte, type, montant, dateoperation FROM operation WHERE id = %s"
QUERY_ACCOUNT = (
    "SELECT id, idcompte, type, montant, dateoperation FROM operation "
    "WHERE idcompte = %s ORDER BY id"
)


class OperationStore(BaseStore):
    """CRUD over ``operation``."""

    table = "operation"

    def create(self, operation: Operation) -> None:
        """Insert ``operation`` and set its generated id and stored date."""
        self._require_new(operation.operation_id, "Operation")
        with self._cursor() as cur:
            cur.execute(INSERT, operation_to_row(operation))
            row = cur.fetchone()
        operation.operation_id = row["id"]
        operation.created_at = row["dateoperation"]
        logger.debug(
            "Created operation on account %d", operation.account_id,
            extra=log_context(self.table, operation.operation_id),
        )

    def update(self, operation: Operation) -> None:
        operation_id = self._require_id(operation.operation_id, "Operation")
        with self._cursor() as cur:
            cur.execute(UPDATE, {**operation_to_row(operation), "id": operation_id})
            if cur.rowcount == 0:
                raise EntityNotFoundError(f"Operation {operation_id} not found")
        logger.debug("Updated operation", extra=log_context(self.table, operation_id))

    def delete(self, operation: Operation) -> None:
        operation_id = self._require_id(operation.operation_id, "Operation")
        with self._cursor() as cur:
            cur.execute(DELETE, (operation_id,))
        logger.debug("Deleted operation", extra=log_context(self.table, operation_id))

    def find_by_id(self, operation_id: int) -> Operation | None:
        with self._cursor() as cur:
            cur.execute(QUERY_ID, (operation_id,))
            row = cur.fetchone()
        return to_operation(row) if row is not None else None

    def find_all(self) -> list[Operation]:
        with self._cursor() as cur:
            cur.execute(QUERY_ALL)
            rows = cur.fetchall()
        return [to_operation(row) for row in rows]

    def find_by_account(self, account_id: int) -> list[Operation]:
        """Operations booked on one account, oldest first."""
        with self._cursor() as cur:
            cur.execute(QUERY_ACCOUNT, (account_id,))
            rows = cur.fetchall()
        return [to_operation(row) for row in rows]

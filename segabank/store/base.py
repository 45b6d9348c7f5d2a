"""Shared statement plumbing for the table stores."""

from collections.abc import Iterator
from contextlib import contextmanager

import psycopg

from segabank.exceptions import InvalidEntityStateError, StatementError
from segabank.logging import get_logger
from segabank.store.connection import ConnectionProvider

logger = get_logger(__name__)


class BaseStore:
    """Base class for stores mapping one table.

    Every public method opens its own connection through ``provider`` and
    releases it before returning.
    """

    table: str = ""

    def __init__(self, provider: ConnectionProvider) -> None:
        self.provider = provider

    @contextmanager
    def _cursor(self) -> Iterator[psycopg.Cursor]:
        """Yield a cursor on a fresh connection.

        psycopg errors raised anywhere in the unit of work, including the
        commit, rollback and close done by the provider, become StatementError.
        """
        try:
            with self.provider.connection() as conn:
                with conn.cursor() as cur:
                    yield cur
        except psycopg.Error as e:
            raise StatementError(f"Statement on {self.table} failed: {e}") from e

    @staticmethod
    def _require_new(entity_id: int | None, what: str) -> None:
        if entity_id is not None:
            raise InvalidEntityStateError(f"{what} already has id {entity_id}")

    @staticmethod
    def _require_id(entity_id: int | None, what: str) -> int:
        if entity_id is None:
            raise InvalidEntityStateError(f"{what} has no id; create it first")
        return entity_id

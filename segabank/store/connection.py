"""Scoped PostgreSQL connections handed to the stores."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.rows import dict_row

from segabank.exceptions import ConnectionUnavailableError
from segabank.logging import get_logger

logger = get_logger(__name__)


class ConnectionProvider:
    """Open one connection per unit of work.

    Parameters
    ----------
    conninfo : str
        PostgreSQL connection string.
    connect : Callable[..., Any] | None
        Connection factory, ``psycopg.connect`` by default. Tests inject a
        factory returning a mock connection.
    """

    def __init__(self, conninfo: str, connect: Callable[..., Any] | None = None) -> None:
        self.conninfo = conninfo
        self._connect = connect or psycopg.connect

    @contextmanager
    def connection(self) -> Iterator[psycopg.Connection]:
        """Yield a connection; commit on success, roll back on error, always close."""
        try:
            conn = self._connect(self.conninfo, row_factory=dict_row)
        except psycopg.Error as e:
            raise ConnectionUnavailableError(f"Cannot connect to database: {e}") from e
        if conn is None:
            raise ConnectionUnavailableError("Connection factory returned no usable connection")

        try:
            yield conn
            conn.commit()
        except Exception:
            logger.debug("Rolling back after error")
            conn.rollback()
            raise
        finally:
            conn.close()

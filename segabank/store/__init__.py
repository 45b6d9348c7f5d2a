"""PostgreSQL-backed stores for agencies, accounts and operations."""

from segabank.store.account import AccountStore
from segabank.store.agency import AgencyStore
from segabank.store.connection import ConnectionProvider
from segabank.store.operation import OperationStore
from segabank.store.schema import SchemaManager

__all__ = ["AccountStore", "AgencyStore", "ConnectionProvider", "OperationStore", "SchemaManager"]

"""Domain models for the back-office."""

from segabank.models.account import Account, FeeAccount, SavingsAccount, SimpleAccount
from segabank.models.agency import Agency
from segabank.models.enums import AccountType, OperationType
from segabank.models.operation import Operation

__all__ = [
    "Account",
    "AccountType",
    "Agency",
    "FeeAccount",
    "Operation",
    "OperationType",
    "SavingsAccount",
    "SimpleAccount",
]

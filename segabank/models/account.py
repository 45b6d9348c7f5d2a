"""Account models: one base class and three storage variants."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar

from segabank.exceptions import InsufficientFundsError, InvalidEntityStateError
from segabank.models.enums import AccountType

if TYPE_CHECKING:
    from segabank.models.operation import Operation


@dataclass(eq=False)
class Account:
    """Bank account entity.

    Accounts compare by identity: they sit in a cyclic graph with their
    operations and are mutated in place by the stores.

    Variants:
    - SimpleAccount: may be overdrawn down to ``-overdraft``
    - SavingsAccount: earns ``interest_rate`` percent, never negative
    - FeeAccount: every movement costs ``FEE_RATE`` of its amount
    """

    account_type: ClassVar[AccountType]

    account_id: int | None
    agency_id: int
    balance: float
    created_at: datetime | None = None
    operations: list[Operation] = field(default_factory=list, repr=False)

    def deposit(self, amount: float) -> None:
        """Credit ``amount`` to the balance."""
        _check_amount(amount)
        self.balance += amount

    def withdraw(self, amount: float) -> None:
        """Debit ``amount`` from the balance, down to the account's floor."""
        _check_amount(amount)
        self._debit(amount)

    def _debit(self, total: float) -> None:
        if self.balance - total < self.floor:
            raise InsufficientFundsError(
                f"Account {self.account_id}: cannot withdraw {total:.2f} "
                f"from balance {self.balance:.2f}"
            )
        self.balance -= total

    @property
    def floor(self) -> float:
        """Lowest balance a withdrawal may leave."""
        return 0.0


@dataclass(eq=False)
class SimpleAccount(Account):
    """Current account with an authorised overdraft."""

    account_type: ClassVar[AccountType] = AccountType.SIMPLE

    overdraft: float = 0.0

    @property
    def floor(self) -> float:
        return -self.overdraft


@dataclass(eq=False)
class SavingsAccount(Account):
    """Savings account paying ``interest_rate`` percent."""

    account_type: ClassVar[AccountType] = AccountType.SAVINGS

    interest_rate: float = 0.0

    def interest(self) -> float:
        """Interest due on the current balance."""
        return self.balance * self.interest_rate / 100

    def apply_interest(self) -> float:
        """Credit the interest due, rounded to the cent, and return the credited amount."""
        earned = round(self.interest(), 2)
        if earned > 0:
            self.balance += earned
        return earned


@dataclass(eq=False)
class FeeAccount(Account):
    """Account charging a fee on each deposit and withdrawal."""

    account_type: ClassVar[AccountType] = AccountType.FEE

    FEE_RATE: ClassVar[float] = 0.05

    def fee(self, amount: float) -> float:
        return amount * self.FEE_RATE

    def deposit(self, amount: float) -> None:
        _check_amount(amount)
        self.balance += amount - self.fee(amount)

    def withdraw(self, amount: float) -> None:
        _check_amount(amount)
        self._debit(amount + self.fee(amount))


def _check_amount(amount: float) -> None:
    if amount <= 0:
        raise InvalidEntityStateError(f"Amount must be positive, got {amount}")

"""Operation model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from segabank.models.enums import OperationType

if TYPE_CHECKING:
    from segabank.models.account import Account


@dataclass(eq=False)
class Operation:
    """A deposit or withdrawal booked on one account.

    ``account_id`` is the stored foreign key; ``account`` is the in-memory
    owner. The two agree except between a reassignment and the next
    ``AccountStore.reconcile_relations`` call.
    """

    operation_id: int | None
    account_id: int
    operation_type: OperationType
    amount: float
    created_at: datetime | None = None
    account: Account | None = field(default=None, repr=False)

    @property
    def is_stale(self) -> bool:
        """True when the back-reference no longer matches the foreign key."""
        return self.account is not None and self.account.account_id != self.account_id

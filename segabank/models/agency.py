"""Agency (bank branch) model."""

from __future__ import annotations

from dataclasses import dataclass, field

from segabank.models.account import Account


@dataclass(eq=False)
class Agency:
    """Bank branch owning a set of accounts."""

    agency_id: int | None
    code: str
    address: str
    accounts: list[Account] = field(default_factory=list, repr=False)

    def find_account(self, account_id: int) -> Account | None:
        for account in self.accounts:
            if account.account_id == account_id:
                return account
        return None

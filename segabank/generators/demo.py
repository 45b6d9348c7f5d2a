"""Demo agencies, accounts and operations for an empty database."""

from collections.abc import Iterator

from segabank.generators.base import BaseGenerator
from segabank.logging import get_logger
from segabank.models import (
    Account,
    AccountType,
    Agency,
    FeeAccount,
    Operation,
    OperationType,
    SavingsAccount,
    SimpleAccount,
)
from segabank.store import AccountStore, AgencyStore, OperationStore

logger = get_logger(__name__)


class DemoDataGenerator(BaseGenerator):
    """Generate a small, consistent back-office dataset.

    Account balances are the result of replaying the generated operations,
    so every account honours its variant's withdrawal rules.
    """

    ACCOUNT_TYPES = list(AccountType)
    ACCOUNT_TYPE_WEIGHTS = [0.5, 0.3, 0.2]

    def generate_agency(self) -> Agency:
        return Agency(
            agency_id=None,
            code=f"AG{self.rng.randint(1, 9999):04d}",
            address=self.fake.address().replace("\n", ", "),
        )

    def generate_account(self, agency_id: int) -> Account:
        """Generate an empty account of a random variant."""
        account_type = self.rng.choices(
            self.ACCOUNT_TYPES, weights=self.ACCOUNT_TYPE_WEIGHTS, k=1
        )[0]
        if account_type is AccountType.SIMPLE:
            return SimpleAccount(
                account_id=None,
                agency_id=agency_id,
                balance=0.0,
                overdraft=float(self.rng.choice([0, 200, 500, 1000])),
            )
        if account_type is AccountType.SAVINGS:
            return SavingsAccount(
                account_id=None,
                agency_id=agency_id,
                balance=0.0,
                interest_rate=self.rng.choice([0.5, 1.0, 2.0, 3.0]),
            )
        return FeeAccount(account_id=None, agency_id=agency_id, balance=0.0)

    def generate_operations(self, account: Account, count: int) -> Iterator[Operation]:
        """Yield ``count`` operations, applying each one to ``account``.

        The first operation is always a deposit; withdrawals take at most
        half of the current balance.
        """
        for i in range(count):
            if i > 0 and account.balance > 10 and self.rng.random() < 0.4:
                amount = round(account.balance * self.rng.uniform(0.05, 0.5), 2)
                account.withdraw(amount)
                operation_type = OperationType.WITHDRAWAL
            else:
                amount = round(self.rng.uniform(20, 2000), 2)
                account.deposit(amount)
                operation_type = OperationType.DEPOSIT

            operation = Operation(
                operation_id=None,
                account_id=account.account_id,
                operation_type=operation_type,
                amount=amount,
                account=account,
            )
            account.operations.append(operation)
            yield operation

    def populate(
        self,
        agency_store: AgencyStore,
        account_store: AccountStore,
        operation_store: OperationStore,
        num_agencies: int = 3,
        accounts_per_agency: int = 4,
        operations_per_account: int = 5,
    ) -> list[Agency]:
        """Persist a generated dataset through the stores and return it related."""
        agencies = []
        for _ in range(num_agencies):
            agency = self.generate_agency()
            agency_store.create(agency)
            for _ in range(accounts_per_agency):
                account = self.generate_account(agency.agency_id)
                account_store.create(account)
                for operation in self.generate_operations(account, operations_per_account):
                    operation_store.create(operation)
                account_store.update(account)
                agency.accounts.append(account)
            agencies.append(agency)

        logger.info(
            "Seeded %d agencies, %d accounts, %d operations",
            num_agencies,
            num_agencies * accounts_per_agency,
            num_agencies * accounts_per_agency * operations_per_account,
        )
        return agencies

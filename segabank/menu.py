"""Text menu over the related agency/account/operation graph."""

from collections.abc import Callable

from segabank.exceptions import EntityNotFoundError, SegaBankError
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
from segabank.store import AccountStore, OperationStore

logger = get_logger(__name__)


class Menu:
    """Console menu driving the stores, one action at a time.

    Parameters
    ----------
    agencies : list[Agency]
        Agencies with their accounts and operations already related.
    account_store : AccountStore
        Store used to persist account changes.
    operation_store : OperationStore
        Store used to persist operation changes.
    input_func : Callable[[str], str]
        Prompt reader (default: ``input``).
    output : Callable[[str], None]
        Line writer (default: ``print``).
    """

    OPTIONS: list[tuple[str, str, str]] = [
        ("1", "List agencies", "list_agencies"),
        ("2", "List accounts of an agency", "list_accounts"),
        ("3", "Show operations of an account", "show_operations"),
        ("4", "Create an account", "create_account"),
        ("5", "Deposit", "deposit"),
        ("6", "Withdraw", "withdraw"),
        ("7", "Move an operation to another account", "move_operation"),
        ("8", "Apply interest to savings accounts", "apply_interest"),
        ("9", "Delete an account", "delete_account"),
        ("0", "Quit", ""),
    ]

    def __init__(
        self,
        agencies: list[Agency],
        account_store: AccountStore,
        operation_store: OperationStore,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ) -> None:
        self.agencies = agencies
        self.account_store = account_store
        self.operation_store = operation_store
        self._input = input_func
        self._output = output

    @property
    def accounts(self) -> list[Account]:
        return [account for agency in self.agencies for account in agency.accounts]

    def run(self) -> None:
        """Show the menu until the user quits or input ends."""
        actions = {key: name for key, _, name in self.OPTIONS}
        while True:
            self.print_menu()
            try:
                choice = self._input("Choice: ").strip()
            except EOFError:
                break
            if choice == "0":
                break
            action = actions.get(choice)
            if action is None:
                self._output(f"Unknown choice: {choice}")
                continue
            try:
                getattr(self, action)()
            except EOFError:
                break
            except ValueError as e:
                self._output(f"Invalid input: {e}")
            except SegaBankError as e:
                logger.warning("Action %s failed: %s", action, e)
                self._output(f"Error: {e}")
        self._output("Goodbye")

    def print_menu(self) -> None:
        self._output("")
        self._output("=" * 40)
        self._output("SegaBank")
        self._output("=" * 40)
        for key, label, _ in self.OPTIONS:
            self._output(f"  {key}. {label}")

    # Actions
    def list_agencies(self) -> None:
        if not self.agencies:
            self._output("No agencies")
        for agency in self.agencies:
            self._output(
                f"[{agency.agency_id}] {agency.code} - {agency.address} "
                f"({len(agency.accounts)} accounts)"
            )

    def list_accounts(self) -> None:
        agency = self._ask_agency()
        if not agency.accounts:
            self._output("No accounts")
        for account in agency.accounts:
            self._output(self.describe(account))

    def show_operations(self) -> None:
        account = self._ask_account("Account id: ")
        self._output(self.describe(account))
        if not account.operations:
            self._output("  No operations")
        for operation in account.operations:
            created = operation.created_at.strftime("%Y-%m-%d %H:%M") if operation.created_at else "-"
            self._output(
                f"  [{operation.operation_id}] {created} "
                f"{operation.operation_type.value:<8} {operation.amount:>12.2f}"
            )

    def create_account(self) -> None:
        agency = self._ask_agency()
        label = self._input(f"Type ({'/'.join(t.value for t in AccountType)}): ").strip()
        account_type = AccountType(label)
        balance = self._ask_float("Initial balance: ")

        if account_type is AccountType.SIMPLE:
            account: Account = SimpleAccount(
                account_id=None,
                agency_id=agency.agency_id,
                balance=balance,
                overdraft=self._ask_float("Overdraft: "),
            )
        elif account_type is AccountType.SAVINGS:
            account = SavingsAccount(
                account_id=None,
                agency_id=agency.agency_id,
                balance=balance,
                interest_rate=self._ask_float("Interest rate (%): "),
            )
        else:
            account = FeeAccount(account_id=None, agency_id=agency.agency_id, balance=balance)

        self.account_store.create(account)
        agency.accounts.append(account)
        self._output(f"Created {self.describe(account)}")

    def deposit(self) -> None:
        account = self._ask_account("Account id: ")
        amount = self._ask_float("Amount: ")
        previous = account.balance
        account.deposit(amount)
        self._book(account, OperationType.DEPOSIT, amount, previous)
        self._output(f"New balance: {account.balance:.2f}")

    def withdraw(self) -> None:
        account = self._ask_account("Account id: ")
        amount = self._ask_float("Amount: ")
        previous = account.balance
        account.withdraw(amount)
        self._book(account, OperationType.WITHDRAWAL, amount, previous)
        self._output(f"New balance: {account.balance:.2f}")

    def move_operation(self) -> None:
        """Reassign an operation's foreign key, relink in memory, then persist it.

        If the update fails the foreign key is put back and the relations
        reconciled again, so the operation returns to its previous account.
        """
        operation_id = self._ask_int("Operation id: ")
        operation = self._find_operation(operation_id)
        target = self._ask_account("Target account id: ")

        previous_id = operation.account_id
        operation.account_id = target.account_id
        AccountStore.reconcile_relations(self.accounts)
        try:
            self.operation_store.update(operation)
        except SegaBankError:
            operation.account_id = previous_id
            AccountStore.reconcile_relations(self.accounts)
            raise
        self._output(f"Operation {operation_id} moved to account {target.account_id}")

    def apply_interest(self) -> None:
        count = 0
        for account in self.accounts:
            if not isinstance(account, SavingsAccount):
                continue
            previous = account.balance
            earned = account.apply_interest()
            if earned <= 0:
                continue
            self._book(account, OperationType.DEPOSIT, earned, previous)
            count += 1
        self._output(f"Interest applied to {count} savings account(s)")

    def delete_account(self) -> None:
        """Delete an account, its operations first."""
        account = self._ask_account("Account id: ")
        confirm = self._input(f"Delete account {account.account_id}? (y/n): ").strip().lower()
        if confirm != "y":
            self._output("Cancelled")
            return

        for operation in list(account.operations):
            self.operation_store.delete(operation)
            account.operations.remove(operation)
        self.account_store.delete(account)
        for agency in self.agencies:
            if account in agency.accounts:
                agency.accounts.remove(account)
        self._output(f"Account {account.account_id} deleted")

    # Helpers
    @staticmethod
    def describe(account: Account) -> str:
        extra = ""
        if isinstance(account, SimpleAccount):
            extra = f" overdraft={account.overdraft:.2f}"
        elif isinstance(account, SavingsAccount):
            extra = f" rate={account.interest_rate:.2f}%"
        created = account.created_at.strftime("%Y-%m-%d") if account.created_at else "-"
        return (
            f"[{account.account_id}] {account.account_type.value:<8} "
            f"balance={account.balance:.2f}{extra} created={created} "
            f"operations={len(account.operations)}"
        )

    def _book(
        self,
        account: Account,
        operation_type: OperationType,
        amount: float,
        previous_balance: float,
    ) -> None:
        """Persist a movement already applied to ``account`` in memory.

        The operation row is written first, then the new balance. If either
        write fails, the balance goes back to ``previous_balance``, an
        operation row already written is deleted, and the error propagates.
        The operation joins ``account.operations`` only once both writes
        succeeded.
        """
        operation = Operation(
            operation_id=None,
            account_id=account.account_id,
            operation_type=operation_type,
            amount=amount,
            account=account,
        )
        try:
            self.operation_store.create(operation)
            self.account_store.update(account)
        except SegaBankError:
            account.balance = previous_balance
            if operation.operation_id is not None:
                self._discard(operation)
            raise
        account.operations.append(operation)

    def _discard(self, operation: Operation) -> None:
        try:
            self.operation_store.delete(operation)
        except SegaBankError:
            # the original failure is the one reported to the user
            logger.exception("Could not delete orphan operation %d", operation.operation_id)

    def _ask_int(self, prompt: str) -> int:
        return int(self._input(prompt).strip())

    def _ask_float(self, prompt: str) -> float:
        return float(self._input(prompt).strip().replace(",", "."))

    def _ask_agency(self) -> Agency:
        agency_id = self._ask_int("Agency id: ")
        for agency in self.agencies:
            if agency.agency_id == agency_id:
                return agency
        raise EntityNotFoundError(f"Agency {agency_id} not found")

    def _ask_account(self, prompt: str) -> Account:
        account_id = self._ask_int(prompt)
        for agency in self.agencies:
            account = agency.find_account(account_id)
            if account is not None:
                return account
        raise EntityNotFoundError(f"Account {account_id} not found")

    def _find_operation(self, operation_id: int) -> Operation:
        for account in self.accounts:
            for operation in account.operations:
                if operation.operation_id == operation_id:
                    return operation
        raise EntityNotFoundError(f"Operation {operation_id} not found")

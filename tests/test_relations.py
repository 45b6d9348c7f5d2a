"""Tests for linking accounts and operations in memory."""

from segabank.models import FeeAccount, SimpleAccount
from segabank.store.account import AccountStore
from tests.factories import make_operation


def _related(accounts: list, operations: list) -> None:
    AccountStore.fill_relations(accounts, operations)


class TestFillRelations:
    """Tests for the full rebuild after a bulk load."""

    def test_groups_operations_by_foreign_key(self) -> None:
        a1 = SimpleAccount(account_id=1, agency_id=1, balance=0.0)
        a2 = FeeAccount(account_id=2, agency_id=1, balance=0.0)
        o1, o2, o3 = make_operation(1, 1), make_operation(2, 2), make_operation(3, 1)

        _related([a1, a2], [o1, o2, o3])

        assert a1.operations == [o1, o3]
        assert a2.operations == [o2]
        assert o1.account is a1
        assert o2.account is a2
        assert o3.account is a1

    def test_orphan_operation_left_unrelated(self) -> None:
        a1 = SimpleAccount(account_id=1, agency_id=1, balance=0.0)
        orphan = make_operation(9, 42)

        _related([a1], [orphan])

        assert a1.operations == []
        assert orphan.account is None

    def test_empty_inputs(self) -> None:
        a1 = SimpleAccount(account_id=1, agency_id=1, balance=0.0)

        _related([a1], [])
        _related([], [make_operation(1, 1)])

        assert a1.operations == []


class TestReconcileRelations:
    """Tests for relinking after operations are reassigned in memory."""

    def test_moves_reassigned_operation(self) -> None:
        a = SimpleAccount(account_id=1, agency_id=1, balance=0.0)
        b = SimpleAccount(account_id=2, agency_id=1, balance=0.0)
        o1 = make_operation(1, 1)
        _related([a, b], [o1])

        o1.account_id = 2
        moved = AccountStore.reconcile_relations([a, b])

        assert moved == 1
        assert a.operations == []
        assert b.operations == [o1]
        assert o1.account is b

    def test_second_call_moves_nothing(self) -> None:
        a = SimpleAccount(account_id=1, agency_id=1, balance=0.0)
        b = SimpleAccount(account_id=2, agency_id=1, balance=0.0)
        o1, o2 = make_operation(1, 1), make_operation(2, 2)
        _related([a, b], [o1, o2])
        o1.account_id = 2
        o2.account_id = 1

        assert AccountStore.reconcile_relations([a, b]) == 2
        before = (list(a.operations), list(b.operations))

        assert AccountStore.reconcile_relations([a, b]) == 0
        assert (a.operations, b.operations) == before

    def test_swap_between_accounts(self) -> None:
        a = SimpleAccount(account_id=1, agency_id=1, balance=0.0)
        b = SimpleAccount(account_id=2, agency_id=1, balance=0.0)
        o1, o2 = make_operation(1, 1), make_operation(2, 2)
        _related([a, b], [o1, o2])

        o1.account_id = 2
        o2.account_id = 1
        AccountStore.reconcile_relations([a, b])

        assert a.operations == [o2]
        assert b.operations == [o1]
        assert o1.account is b
        assert o2.account is a

    def test_unchanged_operations_stay_in_order(self) -> None:
        a = SimpleAccount(account_id=1, agency_id=1, balance=0.0)
        b = SimpleAccount(account_id=2, agency_id=1, balance=0.0)
        o1, o2, o3 = make_operation(1, 1), make_operation(2, 1), make_operation(3, 1)
        o4 = make_operation(4, 2)
        _related([a, b], [o1, o2, o3, o4])

        o2.account_id = 2
        AccountStore.reconcile_relations([a, b])

        assert a.operations == [o1, o3]
        assert b.operations == [o4, o2]

    def test_unknown_target_leaves_operation_in_place(self) -> None:
        a = SimpleAccount(account_id=1, agency_id=1, balance=0.0)
        o1 = make_operation(1, 1)
        _related([a], [o1])

        o1.account_id = 77
        moved = AccountStore.reconcile_relations([a])

        assert moved == 0
        assert a.operations == [o1]
        assert o1.account is a
        assert o1.is_stale

    def test_missing_back_reference_uses_holding_account(self) -> None:
        a = SimpleAccount(account_id=1, agency_id=1, balance=0.0)
        b = SimpleAccount(account_id=2, agency_id=1, balance=0.0)
        o1 = make_operation(1, 2)
        a.operations.append(o1)

        AccountStore.reconcile_relations([a, b])

        assert a.operations == []
        assert b.operations == [o1]
        assert o1.account is b

    def test_does_not_touch_relations_in_sync(self) -> None:
        a = SimpleAccount(account_id=1, agency_id=1, balance=0.0)
        o1 = make_operation(1, 1)
        _related([a], [o1])

        assert AccountStore.reconcile_relations([a]) == 0
        assert a.operations == [o1]

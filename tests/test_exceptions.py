"""Tests for custom exception hierarchy."""

from segabank.exceptions import (
    ConfigurationError,
    ConnectionUnavailableError,
    DataAccessError,
    EntityNotFoundError,
    InsufficientFundsError,
    InvalidEntityStateError,
    MappingError,
    SegaBankError,
    StatementError,
    UnknownAccountTypeError,
    UnknownOperationTypeError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_segabank_error_is_exception(self) -> None:
        assert isinstance(SegaBankError("test"), Exception)

    def test_data_access_errors(self) -> None:
        for cls in (ConnectionUnavailableError, StatementError):
            err = cls("test")
            assert isinstance(err, DataAccessError)
            assert isinstance(err, SegaBankError)

    def test_mapping_errors(self) -> None:
        assert isinstance(UnknownAccountTypeError("test"), MappingError)
        assert isinstance(UnknownOperationTypeError("test"), MappingError)
        assert not isinstance(UnknownAccountTypeError("test"), DataAccessError)

    def test_insufficient_funds_is_invalid_state(self) -> None:
        err = InsufficientFundsError("test")
        assert isinstance(err, InvalidEntityStateError)
        assert isinstance(err, SegaBankError)

    def test_other_errors_are_segabank_errors(self) -> None:
        assert isinstance(EntityNotFoundError("test"), SegaBankError)
        assert isinstance(ConfigurationError("test"), SegaBankError)

    def test_exception_message(self) -> None:
        err = EntityNotFoundError("Account 7 not found")
        assert str(err) == "Account 7 not found"

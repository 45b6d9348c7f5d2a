"""Custom exception hierarchy for segabank."""


class SegaBankError(Exception):
    """Base exception for all segabank errors."""


class DataAccessError(SegaBankError):
    """Raised when the relational store cannot serve a request."""


class ConnectionUnavailableError(DataAccessError):
    """Raised when a database connection cannot be obtained."""


class StatementError(DataAccessError):
    """Raised when a SQL statement fails to execute."""


class EntityNotFoundError(SegaBankError):
    """Raised when a referenced entity does not exist."""


class InvalidEntityStateError(SegaBankError):
    """Raised when an entity is in an invalid state for the operation."""


class InsufficientFundsError(InvalidEntityStateError):
    """Raised when a withdrawal exceeds what the account allows."""


class MappingError(SegaBankError):
    """Raised when a database row cannot be mapped to a domain object."""


class UnknownAccountTypeError(MappingError):
    """Raised when an account row carries an unknown type label."""


class UnknownOperationTypeError(MappingError):
    """Raised when an operation row carries an unknown type label."""


class ConfigurationError(SegaBankError):
    """Raised when configuration is invalid or missing."""

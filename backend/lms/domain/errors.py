"""Exception hierarchy for loan operations."""


class LoanError(Exception):
    """Base exception for all loan errors."""


class InvalidArgument(LoanError, ValueError):
    """Raised when an input value is malformed or out of range."""


class InvalidState(LoanError):
    """Raised when a loan is in a state that does not permit the operation."""


class NotFound(LoanError):
    """Raised when a referenced loan does not exist."""


class ConcurrencyConflict(LoanError):
    """Raised when a loan was modified by someone else since it was loaded."""

"""Custom exceptions for the banking system."""


class BankError(Exception):
    """Base exception for all banking-related errors."""
    pass


class InsufficientBalanceError(BankError):
    """Raised when a withdrawal exceeds the balance minus the overdraft limit."""
    pass


class AlreadyCreditedThisMonthError(BankError):
    """Raised when monthly interest has already been credited for the current month."""
    pass


class UsernameTakenError(BankError):
    """Raised when registering a username that already exists."""
    pass


class InvalidCredentialsError(BankError):
    """Raised when a username/password pair does not match a customer."""
    pass

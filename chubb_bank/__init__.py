"""
Bank of CHUBB

An interactive savings banking console with customer registration, login,
deposits, withdrawals within an overdraft limit, monthly interest and
transaction history. All state is kept in memory.
"""

__version__ = "0.1.0"
__author__ = "Developer"
__email__ = "dev@example.com"

from typing import Optional

from .models import Account, Customer, IdSequence, Transaction, AccountType, TransactionType
from .exceptions import (
    BankError,
    InsufficientBalanceError,
    AlreadyCreditedThisMonthError,
    UsernameTakenError,
    InvalidCredentialsError,
)
from .config import Settings
from .directory import CustomerDirectory
from .cli import main


def create_directory(settings: Optional[Settings] = None) -> CustomerDirectory:
    """
    Create an empty CustomerDirectory.

    Args:
        settings: Business rules to open accounts with, loaded from the
            environment when omitted

    Returns:
        CustomerDirectory instance
    """
    return CustomerDirectory(settings or Settings.load())


__all__ = [
    "Account",
    "Customer",
    "IdSequence",
    "Transaction",
    "AccountType",
    "TransactionType",
    "BankError",
    "InsufficientBalanceError",
    "AlreadyCreditedThisMonthError",
    "UsernameTakenError",
    "InvalidCredentialsError",
    "Settings",
    "CustomerDirectory",
    "create_directory",
    "main"
]

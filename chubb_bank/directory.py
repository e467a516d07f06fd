"""
Customer directory for the Bank of CHUBB console.

This module keeps the in-memory mapping from username to customer and owns
the id sequences every account and transaction number is drawn from.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from .config import Settings
from .exceptions import InvalidCredentialsError, UsernameTakenError
from .models import Account, Customer, IdSequence


class CustomerDirectory:
    """Registers and authenticates customers."""

    def __init__(self, settings: Optional[Settings] = None,
                 account_numbers: Optional[IdSequence] = None,
                 transaction_ids: Optional[IdSequence] = None):
        """Initialize an empty directory."""
        self.settings = settings or Settings()
        self.account_numbers = account_numbers or IdSequence()
        self.transaction_ids = transaction_ids or IdSequence()
        self.logger = logging.getLogger(__name__)
        self._customers: Dict[str, Customer] = {}

    def __len__(self) -> int:
        return len(self._customers)

    def __contains__(self, username: str) -> bool:
        return username in self._customers

    def is_username_taken(self, username: str) -> bool:
        """Check whether a username is already registered."""
        return username in self._customers

    def get_customer(self, username: str) -> Optional[Customer]:
        """Get customer by username."""
        return self._customers.get(username)

    def customers(self) -> List[Customer]:
        """Get all customers."""
        return list(self._customers.values())

    def register(self, username: str, password: str, name: str, address: str,
                 phone: str, initial_deposit, timestamp: Optional[datetime] = None) -> Customer:
        """
        Register a customer and open their savings account.

        The password policy is not checked here; callers validate the
        password before registering.

        Args:
            username: Unique login name
            password: Plain-text password
            name: Display name, also used as the account holder name
            address: Postal address
            phone: Contact number
            initial_deposit: Opening balance of the savings account
            timestamp: When the account is opened (defaults to now)

        Returns:
            The registered Customer

        Raises:
            UsernameTakenError: If the username is already registered
        """
        if username in self._customers:
            self.logger.warning("Registration rejected, username %r is taken", username)
            raise UsernameTakenError(f"Username already exists: {username}")

        account = Account.open(
            holder_name=name,
            initial_deposit=initial_deposit,
            timestamp=timestamp,
            account_numbers=self.account_numbers,
            transaction_ids=self.transaction_ids,
            overdraft_limit=self.settings.overdraft_limit,
            annual_interest_rate=self.settings.annual_interest_rate,
        )
        customer = Customer(
            username=username,
            password=password,
            name=name,
            address=address,
            phone=phone,
            account=account,
        )
        self._customers[username] = customer
        self.logger.info("Registered %r with account %s", username, account.account_number)
        return customer

    def authenticate(self, username: str, password: str) -> Customer:
        """
        Look up a customer by exact username and password.

        Raises:
            InvalidCredentialsError: If the username is unknown or the password
                does not match
        """
        customer = self._customers.get(username)
        if customer is None or not customer.check_password(password):
            self.logger.warning("Failed login for %r", username)
            raise InvalidCredentialsError("Invalid username/password.")

        self.logger.info("Customer %r logged in", username)
        return customer

"""
Data models for the Bank of CHUBB console.

This module contains the savings account, its transaction log and the
customer that owns it.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List, Optional

from .exceptions import AlreadyCreditedThisMonthError, InsufficientBalanceError
from .passwords import credentials_match


logger = logging.getLogger(__name__)

OVERDRAFT_LIMIT = Decimal('200')
ANNUAL_INTEREST_RATE = Decimal('0.05')
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
CENT = Decimal('0.01')


def to_decimal(value) -> Decimal:
    """Convert an amount to Decimal without float artefacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class AccountType(Enum):
    """Types of bank accounts."""
    SAVINGS = "savings"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class TransactionType(Enum):
    """Types of transactions."""
    INITIAL_DEPOSIT = "initial_deposit"
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    INTEREST = "interest"

    @property
    def label(self) -> str:
        return self.value.replace('_', ' ').capitalize()


class IdSequence:
    """Monotonically increasing id allocator.

    Account numbers and transaction ids each come from one of these,
    owned by whoever opens accounts.
    """

    def __init__(self, start: int = 1):
        self._next = start

    def next_id(self) -> int:
        value = self._next
        self._next += 1
        return value


@dataclass(frozen=True)
class Transaction:
    """Represents a single balance-changing event."""

    transaction_id: int
    transaction_type: TransactionType
    amount: Decimal
    timestamp: datetime
    balance_after: Decimal = Decimal('0.00')


@dataclass
class Account:
    """Represents a savings account."""

    account_number: int
    holder_name: str
    balance: Decimal = Decimal('0.00')
    account_type: AccountType = AccountType.SAVINGS
    overdraft_limit: Decimal = OVERDRAFT_LIMIT
    annual_interest_rate: Decimal = ANNUAL_INTEREST_RATE
    last_interest_credit: datetime = EPOCH
    transaction_ids: IdSequence = field(default_factory=IdSequence, repr=False)
    _transactions: List[Transaction] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        """Initialize account after creation."""
        self.balance = to_decimal(self.balance)
        self.overdraft_limit = to_decimal(self.overdraft_limit)
        self.annual_interest_rate = to_decimal(self.annual_interest_rate)

    @classmethod
    def open(cls, holder_name: str, initial_deposit, timestamp: Optional[datetime] = None,
             account_numbers: Optional[IdSequence] = None,
             transaction_ids: Optional[IdSequence] = None,
             overdraft_limit=OVERDRAFT_LIMIT,
             annual_interest_rate=ANNUAL_INTEREST_RATE) -> 'Account':
        """
        Open a new account seeded with an initial deposit.

        The initial deposit is not validated; a negative opening balance is
        accepted as given.

        Args:
            holder_name: Display name of the account holder
            initial_deposit: Opening balance
            timestamp: When the account was opened (defaults to now)
            account_numbers: Sequence the account number is drawn from
            transaction_ids: Sequence every transaction id is drawn from
            overdraft_limit: Amount a withdrawal must leave behind; a withdrawal
                succeeds only while amount <= balance - overdraft_limit
            annual_interest_rate: Yearly rate credited in monthly portions

        Returns:
            The new Account
        """
        account_numbers = account_numbers or IdSequence()
        account = cls(
            account_number=account_numbers.next_id(),
            holder_name=holder_name,
            balance=to_decimal(initial_deposit),
            overdraft_limit=overdraft_limit,
            annual_interest_rate=annual_interest_rate,
            transaction_ids=transaction_ids or IdSequence(),
        )
        account._record(TransactionType.INITIAL_DEPOSIT, account.balance, timestamp)
        logger.info("Opened account %s for %s with %s",
                    account.account_number, holder_name, account.balance)
        return account

    @property
    def transaction_count(self) -> int:
        return len(self._transactions)

    def deposit(self, amount, timestamp: Optional[datetime] = None) -> Transaction:
        """Deposit money to account."""
        amount = to_decimal(amount)
        self.balance += amount
        return self._record(TransactionType.DEPOSIT, amount, timestamp)

    def can_withdraw(self, amount) -> bool:
        """Check if withdrawal stays within the overdraft limit."""
        return to_decimal(amount) <= self.balance - self.overdraft_limit

    def withdraw(self, amount, timestamp: Optional[datetime] = None) -> Transaction:
        """
        Withdraw money from account.

        Raises:
            InsufficientBalanceError: If the amount exceeds the balance minus the
                overdraft limit. Balance and history are left untouched.
        """
        amount = to_decimal(amount)
        if not self.can_withdraw(amount):
            logger.warning("Account %s: withdrawal of %s rejected, balance %s",
                           self.account_number, amount, self.balance)
            raise InsufficientBalanceError(
                f"Insufficient balance. Available: {self.balance - self.overdraft_limit}"
            )

        self.balance -= amount
        return self._record(TransactionType.WITHDRAWAL, amount, timestamp)

    def monthly_interest(self) -> Decimal:
        """Interest one month at the annual rate would earn on the current balance."""
        interest = self.balance * self.annual_interest_rate / Decimal('12')
        return interest.quantize(CENT, rounding=ROUND_HALF_UP)

    def add_monthly_interest(self, now: Optional[datetime] = None) -> Transaction:
        """
        Credit one month of interest.

        Interest can be credited once per calendar month. Only the month and
        year of ``now`` and of the previous credit are compared, so crediting
        on the 31st and again on the 1st of the next month is allowed.

        Raises:
            AlreadyCreditedThisMonthError: If interest was already credited in
                the month of ``now``.
        """
        if now is None:
            now = datetime.now(timezone.utc)

        last = self.last_interest_credit
        if (now.month, now.year) == (last.month, last.year):
            logger.warning("Account %s: interest already credited for %04d-%02d",
                           self.account_number, now.year, now.month)
            raise AlreadyCreditedThisMonthError(
                "Interest has already been added for this month."
            )

        interest = self.monthly_interest()
        self.balance += interest
        self.last_interest_credit = now
        return self._record(TransactionType.INTEREST, interest, now)

    def recent_transactions(self, n: int) -> List[Transaction]:
        """Return up to n transactions, newest first."""
        return list(self._transactions[:max(n, 0)])

    def _record(self, transaction_type: TransactionType, amount: Decimal,
                timestamp: Optional[datetime]) -> Transaction:
        transaction = Transaction(
            transaction_id=self.transaction_ids.next_id(),
            transaction_type=transaction_type,
            amount=amount,
            timestamp=timestamp or datetime.now(timezone.utc),
            balance_after=self.balance,
        )
        self._transactions.insert(0, transaction)
        logger.info("Account %s: %s of %s, balance %s",
                    self.account_number, transaction_type.value, amount, self.balance)
        return transaction


@dataclass
class Customer:
    """A registered customer and the one account they own."""

    username: str
    password: str = field(repr=False)
    name: str
    address: str
    phone: str
    account: Account

    def check_password(self, candidate: str) -> bool:
        return credentials_match(self.password, candidate)

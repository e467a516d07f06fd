"""
Core business logic tests - the most important rules of the savings account.

These tests cover the balance, overdraft, interest and history guarantees
that must hold for the banking console to be reliable.
"""

import random

import pytest
from datetime import datetime, timezone, timedelta
from decimal import Decimal

from chubb_bank.directory import CustomerDirectory
from chubb_bank.exceptions import (
    AlreadyCreditedThisMonthError,
    InsufficientBalanceError,
    UsernameTakenError,
)
from chubb_bank.models import TransactionType


DAY_D = datetime(2026, 6, 15, 10, 30, tzinfo=timezone.utc)


class TestCoreBankingLogic:
    """Core banking business logic tests."""

    @pytest.fixture
    def directory(self):
        """Create an empty CustomerDirectory for testing."""
        return CustomerDirectory()

    def register(self, directory, username="asha", initial_deposit=Decimal('1000')):
        return directory.register(
            username=username,
            password="Str0ng#Pass",
            name="Asha Rao",
            address="4 Park Street",
            phone="9000000000",
            initial_deposit=initial_deposit,
            timestamp=DAY_D,
        )

    def test_withdraw_deposit_history_scenario(self, directory):
        """
        Test 1: Open with 1000, withdraw 1150, withdraw 700, deposit 50.
        Critical: Overdraft rule and newest-first history.
        """
        account = self.register(directory).account

        with pytest.raises(InsufficientBalanceError):
            account.withdraw(Decimal('1150'), DAY_D)
        assert account.balance == Decimal('1000')

        account.withdraw(Decimal('700'), DAY_D + timedelta(minutes=1))
        assert account.balance == Decimal('300')

        account.deposit(Decimal('50'), DAY_D + timedelta(minutes=2))
        assert account.balance == Decimal('350')

        recent = account.recent_transactions(2)
        assert [(t.transaction_type, t.amount) for t in recent] == [
            (TransactionType.DEPOSIT, Decimal('50')),
            (TransactionType.WITHDRAWAL, Decimal('700')),
        ]

    def test_interest_on_1200_adds_five(self, directory):
        """
        Test 2: Interest at 0.05/12 on 1200.
        Critical: Interest amount and rounding must be exact.
        """
        account = self.register(directory, initial_deposit=Decimal('1200')).account

        transaction = account.add_monthly_interest(DAY_D)

        assert transaction.amount == Decimal('5.00')
        assert account.balance == Decimal('1205.00')

    def test_interest_at_most_once_per_month(self, directory):
        """
        Test 3: Second interest request in the same calendar month.
        Critical: Interest must never be double credited.
        """
        account = self.register(directory).account
        account.add_monthly_interest(DAY_D)
        balance = account.balance

        with pytest.raises(AlreadyCreditedThisMonthError):
            account.add_monthly_interest(DAY_D + timedelta(days=10))

        assert account.balance == balance

    def test_balance_equals_sum_of_successful_operations(self, directory):
        """
        Test 4: Balance after any sequence of deposits and withdrawals.
        Critical: Balance = initial + deposits - successful withdrawals.
        """
        account = self.register(directory).account
        rng = random.Random(42)
        expected = Decimal('1000')

        for _ in range(200):
            amount = Decimal(rng.randint(1, 50000)) / 100
            if rng.random() < 0.5:
                account.deposit(amount, DAY_D)
                expected += amount
            else:
                succeeds = amount <= account.balance - Decimal('200')
                try:
                    account.withdraw(amount, DAY_D)
                except InsufficientBalanceError:
                    assert not succeeds
                else:
                    assert succeeds
                    expected -= amount

            assert account.balance == expected
            assert account.balance >= Decimal('200')

    def test_failed_withdrawal_leaves_history_unchanged(self, directory):
        """
        Test 5: A rejected withdrawal records nothing.
        Critical: Failed operations must not corrupt state.
        """
        account = self.register(directory).account
        before = account.recent_transactions(10)

        with pytest.raises(InsufficientBalanceError):
            account.withdraw(Decimal('800.01'), DAY_D)

        assert account.recent_transactions(10) == before

    def test_recent_transactions_strictly_decreasing(self, directory):
        """
        Test 6: History is newest first with min(n, total) entries.
        Critical: Customers see their latest activity first.
        """
        account = self.register(directory).account
        for amount in range(1, 8):
            account.deposit(amount, DAY_D)

        for n in range(0, 12):
            recent = account.recent_transactions(n)
            ids = [t.transaction_id for t in recent]
            assert len(recent) == min(n, account.transaction_count)
            assert all(a > b for a, b in zip(ids, ids[1:]))

    def test_transaction_ids_unique_across_accounts(self, directory):
        """
        Test 7: Transaction ids are process-wide, not per account.
        Critical: Every transaction can be identified unambiguously.
        """
        first = self.register(directory, "first").account
        second = self.register(directory, "second").account
        first.deposit(1, DAY_D)
        second.deposit(2, DAY_D)
        first.withdraw(3, DAY_D)

        ids = [t.transaction_id for t in first.recent_transactions(10)]
        ids += [t.transaction_id for t in second.recent_transactions(10)]
        assert sorted(ids) == [1, 2, 3, 4, 5]

    def test_duplicate_username_rejected(self, directory):
        """
        Test 8: Registering an existing username.
        Critical: Usernames identify customers uniquely.
        """
        self.register(directory)

        with pytest.raises(UsernameTakenError):
            self.register(directory)

        assert len(directory) == 1

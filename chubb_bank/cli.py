"""
CLI interface for the Bank of CHUBB console.

This module provides the interactive shell: registration, login and the
customer menu for deposits, withdrawals, interest and transaction history.
"""

import click
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional
from zoneinfo import ZoneInfo

from .config import Settings, LOG_LEVELS
from .directory import CustomerDirectory
from .exceptions import (
    AlreadyCreditedThisMonthError,
    InsufficientBalanceError,
    InvalidCredentialsError,
    UsernameTakenError,
)
from .models import Customer, Transaction
from .passwords import password_problems


logger = logging.getLogger(__name__)


class BankCLI:
    """CLI wrapper for bank operations."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize CLI with an empty customer directory."""
        self.settings = settings or Settings()
        self.directory = CustomerDirectory(self.settings)
        self.tz = ZoneInfo(self.settings.timezone)

    def now(self) -> datetime:
        """Current time in the display timezone."""
        return datetime.now(self.tz)

    def format_currency(self, amount: Decimal) -> str:
        """Format currency for display."""
        sign = "-" if amount < 0 else ""
        return f"{sign}{self.settings.currency_symbol}{abs(amount):,.2f}"

    def parse_currency(self, amount_str: str) -> Decimal:
        """Parse currency input."""
        try:
            # Remove currency symbol and commas
            clean_str = amount_str.replace(self.settings.currency_symbol, '').replace(',', '').strip()
            amount = Decimal(clean_str)
        except (InvalidOperation, ValueError):
            raise ValueError(f"Invalid amount: {amount_str}")
        if not amount.is_finite():
            raise ValueError(f"Invalid amount: {amount_str}")
        return amount

    def format_timestamp(self, timestamp: datetime) -> str:
        """Format a timestamp in the display timezone."""
        return timestamp.astimezone(self.tz).strftime(self.settings.timestamp_format)

    def format_transaction(self, transaction: Transaction) -> str:
        """Format one transaction history line."""
        return (
            f"ID: {transaction.transaction_id}, "
            f"Type: {transaction.transaction_type.label}, "
            f"Amount: {self.format_currency(transaction.amount)}, "
            f"Date: {self.format_timestamp(transaction.timestamp)}"
        )


class AmountParamType(click.ParamType):
    """Click parameter type accepting currency amounts such as '1,200.50'."""

    name = "amount"

    def __init__(self, bank_cli: BankCLI):
        self.bank_cli = bank_cli

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            return self.bank_cli.parse_currency(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


def validate_password(value: str) -> str:
    """Prompt value processor that rejects passwords breaking the policy."""
    problems = password_problems(value)
    if problems:
        raise click.BadParameter(
            "Invalid password. It needs " + ", ".join(problems) + ". Try again"
        )
    return value


def prompt_amount(bank_cli: BankCLI, text: str) -> Decimal:
    return click.prompt(text, type=AmountParamType(bank_cli))


def register_customer(bank_cli: BankCLI) -> Optional[Customer]:
    """Collect registration details and register a new customer."""
    directory = bank_cli.directory

    name = click.prompt("Enter name")
    address = click.prompt("Enter address")
    phone = click.prompt("Enter contact number")

    username = click.prompt("Set username")
    while directory.is_username_taken(username):
        username = click.prompt("Username already exists. Choose another")

    password = click.prompt(
        "Set password (8 chars, 1 digit, 1 lowercase, 1 uppercase, 1 special character)",
        value_proc=validate_password,
    )
    initial_deposit = prompt_amount(bank_cli, "Enter initial deposit")

    try:
        customer = directory.register(
            username=username,
            password=password,
            name=name,
            address=address,
            phone=phone,
            initial_deposit=initial_deposit,
            timestamp=bank_cli.now(),
        )
    except UsernameTakenError as e:
        click.echo(f"❌ Error: {e}", err=True)
        return None

    click.echo("✅ Account registered successfully!")
    click.echo(f"Account Number: {customer.account.account_number}")
    return customer


def login(bank_cli: BankCLI) -> None:
    """Authenticate a customer and open their menu."""
    username = click.prompt("Enter username")
    password = click.prompt("Enter password", hide_input=True)

    try:
        customer = bank_cli.directory.authenticate(username, password)
    except InvalidCredentialsError:
        click.echo("❌ Invalid username/password.", err=True)
        return

    customer_menu(bank_cli, customer)


def show_account_header(bank_cli: BankCLI, customer: Customer) -> None:
    account = customer.account
    click.echo(f"\nAccount Number: {account.account_number}")
    click.echo(f"Account Holder: {account.holder_name}")
    click.echo(f"Account Type: {account.account_type.label}")
    click.echo(f"Balance: {bank_cli.format_currency(account.balance)}")


def deposit_amount(bank_cli: BankCLI, customer: Customer) -> None:
    amount = prompt_amount(bank_cli, "Enter amount to deposit")
    customer.account.deposit(amount, bank_cli.now())
    click.echo("✅ Deposit successful.")
    click.echo(f"New Balance: {bank_cli.format_currency(customer.account.balance)}")


def withdraw_amount(bank_cli: BankCLI, customer: Customer) -> None:
    amount = prompt_amount(bank_cli, "Enter amount to withdraw")
    try:
        customer.account.withdraw(amount, bank_cli.now())
    except InsufficientBalanceError:
        click.echo("❌ Insufficient balance.", err=True)
        return

    click.echo("✅ Withdrawal successful.")
    click.echo(f"New Balance: {bank_cli.format_currency(customer.account.balance)}")


def show_last_transactions(bank_cli: BankCLI, customer: Customer) -> None:
    count = bank_cli.settings.recent_transactions_count
    click.echo(f"\n📋 Last {count} transactions")
    for transaction in customer.account.recent_transactions(count):
        click.echo(bank_cli.format_transaction(transaction))


def add_monthly_interest(bank_cli: BankCLI, customer: Customer) -> None:
    try:
        transaction = customer.account.add_monthly_interest(bank_cli.now())
    except AlreadyCreditedThisMonthError:
        click.echo("ℹ️ Interest has already been added for this month.")
        return

    click.echo("✅ Monthly interest has been added.")
    click.echo(f"Interest Amount: {bank_cli.format_currency(transaction.amount)}")


def check_balance(bank_cli: BankCLI, customer: Customer) -> None:
    click.echo(f"💰 Current balance: {bank_cli.format_currency(customer.account.balance)}")


CUSTOMER_ACTIONS = {
    1: deposit_amount,
    2: withdraw_amount,
    3: show_last_transactions,
    4: add_monthly_interest,
    5: check_balance,
}


def customer_menu(bank_cli: BankCLI, customer: Customer) -> None:
    """Run the logged-in customer's menu until they log out."""
    while True:
        show_account_header(bank_cli, customer)
        click.echo("\n1. Deposit")
        click.echo("2. Withdraw")
        click.echo(f"3. View last {bank_cli.settings.recent_transactions_count} transactions")
        click.echo("4. Add monthly interest")
        click.echo("5. Check balance")
        click.echo("6. Log out")
        choice = click.prompt("Enter your choice", type=int)

        if choice == 6:
            click.echo("Logging out...")
            return

        action = CUSTOMER_ACTIONS.get(choice)
        if action is None:
            click.echo("Invalid choice.")
            continue
        action(bank_cli, customer)


def main_menu(bank_cli: BankCLI) -> None:
    """Run the top-level menu until the user exits."""
    bank_name = bank_cli.settings.bank_name
    while True:
        click.echo(f"\n{bank_name.upper()}")
        click.echo("1. Register account")
        click.echo("2. Login")
        click.echo("3. Exit")
        choice = click.prompt("Enter your choice", type=int)

        if choice == 1:
            register_customer(bank_cli)
        elif choice == 2:
            login(bank_cli)
        elif choice == 3:
            click.echo(f"Thank you for using {bank_name}.")
            return
        else:
            click.echo("Invalid choice.")


@click.group(invoke_without_command=True)
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default=None, help='Logging level (overrides CHUBB_BANK_LOG_LEVEL)')
@click.pass_context
def cli(ctx, log_level):
    """Bank of CHUBB savings banking console"""
    try:
        settings = Settings.load()
    except ValueError as e:
        raise click.ClickException(str(e))

    if log_level:
        settings.log_level = log_level.upper()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("chubb_bank").setLevel(settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj['cli'] = BankCLI(settings)

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.pass_context
def run(ctx):
    """Start the interactive banking session."""
    bank_cli = ctx.obj['cli']
    logger.info("Session started")
    main_menu(bank_cli)
    logger.info("Session ended with %d registered customers", len(bank_cli.directory))


@cli.command()
@click.option('--password', prompt='Password', hide_input=True, help='Password to check')
def check_password(password):
    """Check a password against the registration policy."""
    problems = password_problems(password)
    if problems:
        click.echo("❌ Password is not acceptable. It needs:", err=True)
        for problem in problems:
            click.echo(f"  - {problem}", err=True)
    else:
        click.echo("✅ Password meets the policy.")


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == '__main__':
    main()

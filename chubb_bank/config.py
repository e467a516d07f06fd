"""Configuration management for the Bank of CHUBB console."""

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

ENV_PREFIX = "CHUBB_BANK_"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _env_decimal(name: str, default: Decimal) -> Decimal:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return Decimal(raw.strip())
    except InvalidOperation:
        raise ValueError(f"{ENV_PREFIX}{name} must be a decimal number, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}")


def _env_positive_int(name: str, default: int) -> int:
    value = _env_int(name, default)
    if value < 1:
        raise ValueError(f"{ENV_PREFIX}{name} must be at least 1, got {value}")
    return value


def _env_timezone(name: str, default: str) -> str:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        ZoneInfo(raw.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError):
        raise ValueError(f"{ENV_PREFIX}{name} must be an IANA time zone, got {raw!r}")
    return raw.strip()


@dataclass
class Settings:
    """Configuration settings for the bank console.

    Business rules and display preferences live here instead of being
    hardcoded in the account model or the shell.
    """

    bank_name: str = "Bank of CHUBB"

    # Business Rules
    overdraft_limit: Decimal = Decimal('200')
    annual_interest_rate: Decimal = Decimal('0.05')

    # Display
    currency_symbol: str = "₹"
    timezone: str = "Asia/Kolkata"
    timestamp_format: str = "%d-%m-%Y %H:%M:%S"
    recent_transactions_count: int = 5

    # Logging
    log_level: str = "ERROR"

    @classmethod
    def load(cls) -> 'Settings':
        """Load settings from environment variables.

        Every setting may be overridden with a ``CHUBB_BANK_`` prefixed
        variable, e.g. ``CHUBB_BANK_OVERDRAFT_LIMIT=500``.

        Returns:
            Settings: A Settings instance with environment overrides applied.

        Raises:
            ValueError: If an override cannot be parsed or is out of range.
        """
        defaults = cls()
        log_level = os.getenv(ENV_PREFIX + "LOG_LEVEL", defaults.log_level).strip().upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

        return cls(
            bank_name=os.getenv(ENV_PREFIX + "BANK_NAME", defaults.bank_name),
            overdraft_limit=_env_decimal("OVERDRAFT_LIMIT", defaults.overdraft_limit),
            annual_interest_rate=_env_decimal("ANNUAL_INTEREST_RATE", defaults.annual_interest_rate),
            currency_symbol=os.getenv(ENV_PREFIX + "CURRENCY_SYMBOL", defaults.currency_symbol),
            timezone=_env_timezone("TIMEZONE", defaults.timezone),
            timestamp_format=os.getenv(ENV_PREFIX + "TIMESTAMP_FORMAT", defaults.timestamp_format),
            recent_transactions_count=_env_positive_int("RECENT_TRANSACTIONS_COUNT",
                                                        defaults.recent_transactions_count),
            log_level=log_level,
        )

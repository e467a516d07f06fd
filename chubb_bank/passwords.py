"""
Password policy and credential checks.

Passwords are stored and compared in plain text. All comparisons go through
credentials_match() so a hashed scheme only has to change one place.
"""

import re
from typing import List

MIN_LENGTH = 8
SPECIAL_CHARACTERS = "!@#$%^&*_"

_RULES = [
    (re.compile(r"\d"), "at least one digit"),
    (re.compile(r"[a-z]"), "at least one lowercase letter"),
    (re.compile(r"[A-Z]"), "at least one uppercase letter"),
    (re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]"),
     f"at least one special character ({' '.join(SPECIAL_CHARACTERS)})"),
]


def password_problems(password: str) -> List[str]:
    """Return the policy rules the password does not satisfy."""
    problems = []
    if len(password) < MIN_LENGTH:
        problems.append(f"at least {MIN_LENGTH} characters")
    for pattern, description in _RULES:
        if not pattern.search(password):
            problems.append(description)
    return problems


def is_valid_password(password: str) -> bool:
    """Check a password against the registration policy."""
    return not password_problems(password)


def credentials_match(stored: str, supplied: str) -> bool:
    return stored == supplied

"""Tests for the password policy and credential comparison."""

import pytest

from chubb_bank.passwords import (
    SPECIAL_CHARACTERS,
    credentials_match,
    is_valid_password,
    password_problems,
)


class TestPasswordPolicy:
    """Test is_valid_password and password_problems."""

    @pytest.mark.parametrize("password", [
        "Secret#123",
        "aB3!aaaa",
        "UPPER_lower9",
        "Xx1" + SPECIAL_CHARACTERS,
    ])
    def test_valid_passwords(self, password):
        assert is_valid_password(password) is True
        assert password_problems(password) == []

    @pytest.mark.parametrize("password, problem", [
        ("aB3!aaa", "at least 8 characters"),
        ("abcdefG!", "at least one digit"),
        ("ABCDEF1!", "at least one lowercase letter"),
        ("abcdef1!", "at least one uppercase letter"),
        ("Abcdef12", "at least one special character"),
    ])
    def test_single_missing_rule(self, password, problem):
        problems = password_problems(password)

        assert is_valid_password(password) is False
        assert len(problems) == 1
        assert problems[0].startswith(problem)

    def test_characters_outside_special_set_do_not_count(self):
        assert is_valid_password("Abcdef1-") is False
        assert is_valid_password("Abcdef1?") is False
        assert is_valid_password("Abcdef1 ") is False

    def test_empty_password_lists_every_rule(self):
        assert len(password_problems("")) == 5

    def test_special_character_set(self):
        assert SPECIAL_CHARACTERS == "!@#$%^&*_"


class TestCredentialsMatch:
    """Test credentials_match."""

    def test_exact_match(self):
        assert credentials_match("Secret#123", "Secret#123") is True

    def test_case_sensitive(self):
        assert credentials_match("Secret#123", "secret#123") is False

    def test_no_trimming(self):
        assert credentials_match("Secret#123", "Secret#123 ") is False

import pytest

from pokecollect.utils.validators import (
    sanitize_input,
    validate_email,
    validate_login_password,
    validate_name,
    validate_password,
    validate_password_confirmation,
    validate_quantity,
    validate_reset_code,
)


@pytest.mark.parametrize("email, valid", [
    ("ash@example.com", True),
    ("  ash@example.com  ", True),
    ("", False),
    ("ash.example.com", False),
    ("ash@example", False),
    ("a" * 95 + "@x.com", False),
])
def test_validate_email(email, valid):
    assert validate_email(email)[0] is valid


def test_email_messages():
    assert validate_email("") == (False, "Email address is required")
    assert validate_email("ash") == (False, "Please enter a valid email address")


@pytest.mark.parametrize("password, valid", [
    ("Pikachu1!", True),
    ("Aa1@aaaa", True),
    ("Pika1!", False),          # too short
    ("pikachu1!", False),       # no uppercase
    ("PIKACHU1!", False),       # no lowercase
    ("Pikachu!!", False),       # no digit
    ("Pikachu11", False),       # no symbol
    ("Pikachu1! ", False),      # space not allowed
    ("Pikachu1!#", False),      # symbol outside the allowed set
    ("A1@" + "a" * 126, False),  # too long
])
def test_validate_password(password, valid):
    assert validate_password(password)[0] is valid


def test_login_password_only_checks_length():
    assert validate_login_password("password") == (True, "")
    assert validate_login_password("")[0] is False
    assert validate_login_password("seven77")[0] is False


def test_validate_password_confirmation():
    assert validate_password_confirmation("Pikachu1!", "Pikachu1!") == (True, "")
    assert validate_password_confirmation("Pikachu1!", "pikachu1!") == (False, "Passwords do not match")


@pytest.mark.parametrize("name, valid", [
    ("Ash", True),
    ("  Al  ", True),
    (" A ", False),
    ("", False),
    ("x" * 101, False),
])
def test_validate_name(name, valid):
    assert validate_name(name)[0] is valid


@pytest.mark.parametrize("code, valid", [
    ("123456", True),
    ("000000", True),
    ("12345", False),
    ("1234567", False),
    ("12a456", False),
    ("", False),
])
def test_validate_reset_code(code, valid):
    assert validate_reset_code(code)[0] is valid


@pytest.mark.parametrize("quantity, valid", [(0, True), (5, True), (-1, False), (2.0, False), (True, False)])
def test_validate_quantity(quantity, valid):
    assert validate_quantity(quantity)[0] is valid


def test_sanitize_input():
    assert sanitize_input("  Pika\x00chu  ") == "Pikachu"
    assert sanitize_input(None) == ""

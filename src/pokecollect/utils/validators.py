"""
Validation utilities for client-side input checks.

Every validator returns ``(is_valid, error_message)``; the message is empty
when the input is valid.
"""
import re
from typing import Tuple

from pokecollect.config.settings import settings


def validate_email(email: str) -> Tuple[bool, str]:
    """
    Validate email address format.

    Args:
        email: Email address to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    email = (email or "").strip()
    if not email:
        return False, "Email address is required"

    if "@" not in email or "." not in email:
        return False, "Please enter a valid email address"

    if len(email) > settings.EMAIL_MAX_LENGTH:
        return False, f"Email address is too long (max {settings.EMAIL_MAX_LENGTH} characters)"

    return True, ""


def validate_login_password(password: str) -> Tuple[bool, str]:
    """Check a password entered at login: presence and length only."""
    if not password:
        return False, "Password is required"

    if len(password) < settings.PASSWORD_MIN_LENGTH:
        return False, f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"

    if len(password) > settings.PASSWORD_MAX_LENGTH:
        return False, f"Password is too long (max {settings.PASSWORD_MAX_LENGTH} characters)"

    return True, ""


def validate_password(password: str) -> Tuple[bool, str]:
    """
    Validate password strength for new passwords.

    Args:
        password: Password to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    is_valid, message = validate_login_password(password)
    if not is_valid:
        return is_valid, message

    symbols = re.escape(settings.PASSWORD_SYMBOLS)

    if not re.search(r'[A-Z]', password):
        return False, "Password must contain at least one uppercase letter"

    if not re.search(r'[a-z]', password):
        return False, "Password must contain at least one lowercase letter"

    if not re.search(r'\d', password):
        return False, "Password must contain at least one number"

    if not re.search(f'[{symbols}]', password):
        return False, f"Password must contain at least one of {settings.PASSWORD_SYMBOLS}"

    if not re.fullmatch(f'[A-Za-z0-9{symbols}]+', password):
        return False, f"Password may only contain letters, numbers and {settings.PASSWORD_SYMBOLS}"

    return True, ""


def validate_password_confirmation(password: str, confirm_password: str) -> Tuple[bool, str]:
    if password != confirm_password:
        return False, "Passwords do not match"
    return True, ""


def validate_name(name: str) -> Tuple[bool, str]:
    """Validate a display name (length measured after trimming)."""
    name = (name or "").strip()
    if not name:
        return False, "Name is required"

    if len(name) < settings.NAME_MIN_LENGTH:
        return False, f"Name must be at least {settings.NAME_MIN_LENGTH} characters"

    if len(name) > settings.NAME_MAX_LENGTH:
        return False, f"Name is too long (max {settings.NAME_MAX_LENGTH} characters)"

    return True, ""


def validate_reset_code(code: str) -> Tuple[bool, str]:
    """
    Validate a password reset verification code.

    Args:
        code: Code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not code:
        return False, "Verification code is required"

    if not re.fullmatch(r'[0-9]+', code):
        return False, "Verification code must contain only digits"

    if len(code) != settings.RESET_CODE_LENGTH:
        return False, f"Please enter the complete {settings.RESET_CODE_LENGTH}-digit verification code"

    return True, ""


def validate_quantity(quantity: int) -> Tuple[bool, str]:
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        return False, "Quantity must be a whole number"
    if quantity < 0:
        return False, "Quantity cannot be negative"
    return True, ""


def sanitize_input(text: str) -> str:
    """Trim search or form input and drop NUL characters."""
    return (text or "").replace('\x00', '').strip()

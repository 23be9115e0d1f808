"""
Error translation utilities for user-friendly error messages.
"""
from typing import Any

from pokecollect.api.errors import (
    NetworkError,
    NotFoundError,
    RequestTimeoutError,
    ServerError,
    UnauthorizedError,
    unwrap_error,
)
from pokecollect.utils.security import CredentialSaveError


class ErrorTranslator:
    """
    Translates API and storage errors into user-friendly messages.
    """

    ERROR_MESSAGES = {
        # Authentication errors
        "invalid_credentials": "Invalid email or password.",
        "account_exists": "An account with this email already exists.",
        "credential_save_failed": "Failed to save login information securely.",

        # Password reset errors
        "invalid_reset_input": "Invalid reset code or password format. Please try again.",
        "account_not_found": "Account not found. Please start the password reset process again.",
        "reset_code_expired": "Reset code has expired. Please request a new code.",
        "invalid_verification_code": "Invalid verification code. Please try again.",
        "reset_failed": "Failed to reset password. Please try again.",
        "reset_code_request_failed": "Failed to send reset code. Please try again.",
        "verification_failed": "Failed to verify code. Please try again.",

        # Network errors
        "network_error": "Network connection failed. Please check your internet connection.",
        "timeout": "Request timed out. Please try again.",

        # API errors
        "server_error": "Server error occurred.",
        "server_error_retry": "Server error occurred. Please try again.",
        "unexpected": "An unexpected error occurred. Please try again.",
    }

    # Password reset steps
    STEP_REQUEST_CODE = "request_code"
    STEP_VERIFY_CODE = "verify_code"
    STEP_RESET_PASSWORD = "reset_password"

    @classmethod
    def translate_auth_error(cls, error: Exception) -> str:
        """
        Translate a login/registration/validation failure.

        Args:
            error: Service, API or credential storage error

        Returns:
            User-friendly error message
        """
        error = unwrap_error(error)

        if isinstance(error, UnauthorizedError):
            return cls.ERROR_MESSAGES["invalid_credentials"]
        if isinstance(error, ServerError):
            if error.status_code == 409:
                return cls.ERROR_MESSAGES["account_exists"]
            return error.message or cls.ERROR_MESSAGES["server_error"]
        if isinstance(error, NetworkError):
            return cls.ERROR_MESSAGES["network_error"]
        if isinstance(error, RequestTimeoutError):
            return cls.ERROR_MESSAGES["timeout"]
        if isinstance(error, CredentialSaveError):
            return cls.ERROR_MESSAGES["credential_save_failed"]

        return cls.ERROR_MESSAGES["unexpected"]

    @classmethod
    def translate_reset_error(cls, error: Exception, step: str) -> str:
        """
        Translate a failure from one step of the password reset flow.

        Args:
            error: Service or API error
            step: One of the STEP_* constants

        Returns:
            User-friendly error message
        """
        error = unwrap_error(error)

        if isinstance(error, NetworkError):
            return cls.ERROR_MESSAGES["network_error"]
        if isinstance(error, RequestTimeoutError):
            return cls.ERROR_MESSAGES["timeout"]

        if step == cls.STEP_VERIFY_CODE:
            if isinstance(error, UnauthorizedError) or (
                    isinstance(error, ServerError) and error.status_code == 400):
                return cls.ERROR_MESSAGES["invalid_verification_code"]
            if isinstance(error, ServerError) and error.message:
                return error.message
            return cls.ERROR_MESSAGES["verification_failed"]

        if step == cls.STEP_RESET_PASSWORD:
            if isinstance(error, UnauthorizedError):
                return cls.ERROR_MESSAGES["reset_code_expired"]
            if isinstance(error, NotFoundError):
                return cls.ERROR_MESSAGES["account_not_found"]
            if isinstance(error, ServerError):
                if error.status_code == 400:
                    return cls.ERROR_MESSAGES["invalid_reset_input"]
                return error.message or cls.ERROR_MESSAGES["server_error_retry"]
            return cls.ERROR_MESSAGES["reset_failed"]

        if isinstance(error, ServerError) and error.message:
            return error.message
        return cls.ERROR_MESSAGES["reset_code_request_failed"]

    @classmethod
    def translate(cls, error: Any, default_message: str = "An error occurred") -> str:
        """
        Describe an error for display without interpreting it.

        Service errors already name what failed, so their text is used as is.
        """
        if isinstance(error, str):
            return cls.ERROR_MESSAGES.get(error, error or default_message)

        if isinstance(error, Exception):
            return str(error) or default_message

        return default_message


# Global instance
error_translator = ErrorTranslator()

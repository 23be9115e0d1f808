"""
Password reset service.

Three steps, each a separate blocking call:
  1. request_code   -> server emails a 6-digit code
  2. verify_code    -> server confirms the code before asking for a password
  3. reset_password -> server sets the new password
"""
from dataclasses import dataclass

from pokecollect.api.auth_client import AuthClient
from pokecollect.api.errors import AuthError
from pokecollect.utils.error_translator import ErrorTranslator, error_translator
from pokecollect.utils.logger import logger
from pokecollect.utils.validators import (
    validate_email,
    validate_password,
    validate_password_confirmation,
    validate_reset_code,
)


@dataclass
class ResetResult:
    """Result container for password reset steps."""
    success: bool
    message: str


class PasswordResetService:
    """
    Business-logic service for the forgot-password workflow.

    All methods are blocking; use ApiWorker for background calls.
    """

    def __init__(self, auth_client: AuthClient):
        self._auth_client = auth_client

    def request_code(self, email: str) -> ResetResult:
        is_valid, err = validate_email(email)
        if not is_valid:
            return ResetResult(success=False, message=err)

        try:
            response = self._auth_client.forgot_password(email)
        except AuthError as e:
            return self._failed(e, ErrorTranslator.STEP_REQUEST_CODE)

        return ResetResult(success=True, message=response.message)

    def verify_code(self, email: str, code: str) -> ResetResult:
        """Check the emailed code; the caller moves on to the new-password step on success."""
        for is_valid, err in (validate_email(email), validate_reset_code((code or "").strip())):
            if not is_valid:
                return ResetResult(success=False, message=err)

        try:
            response = self._auth_client.verify_reset_code(email, code)
        except AuthError as e:
            return self._failed(e, ErrorTranslator.STEP_VERIFY_CODE)

        return ResetResult(success=True, message=response.message)

    def reset_password(
        self,
        email: str,
        code: str,
        new_password: str,
        confirm_password: str,
    ) -> ResetResult:
        """
        Set a new password.

        Args:
            email: Account email
            code: Previously verified reset code
            new_password: New password (must pass strength rules)
            confirm_password: Must equal new_password

        Returns:
            ResetResult with the server's message or a user-facing error
        """
        checks = (
            validate_email(email),
            validate_reset_code((code or "").strip()),
            validate_password(new_password),
            validate_password_confirmation(new_password, confirm_password),
        )
        for is_valid, err in checks:
            if not is_valid:
                return ResetResult(success=False, message=err)

        try:
            response = self._auth_client.reset_password(email, code, new_password)
        except AuthError as e:
            return self._failed(e, ErrorTranslator.STEP_RESET_PASSWORD)

        return ResetResult(success=True, message=response.message)

    @staticmethod
    def _failed(error: AuthError, step: str) -> ResetResult:
        message = error_translator.translate_reset_error(error, step)
        logger.error(f"Password reset step {step} failed: {error}")
        return ResetResult(success=False, message=message)

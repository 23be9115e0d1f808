"""
Authentication API Client for PokeCollect.

Handles login, registration, the password reset flow and token checks.
Storing the returned token is the session service's job.
"""
from pokecollect.api.base_client import ApiClient, RESPONSE_TEXT
from pokecollect.api.errors import ApiError, AuthError, DecodingError
from pokecollect.config.settings import settings
from pokecollect.models.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    ResetPasswordRequest,
    SignupRequest,
    SuccessResponse,
    VerifyResetCodeRequest,
    normalize_email,
)
from pokecollect.utils.logger import logger


class AuthClient:
    """
    Authentication API client.

    Features:
    - Email/password login and registration
    - Password reset: request code, verify code, set new password
    - Lightweight token check
    """

    def __init__(self, api_client: ApiClient):
        self._api = api_client
        self._endpoints = settings.get_api_endpoints()

    def login(self, email: str, password: str) -> AuthResponse:
        """
        Authenticate user and obtain a bearer token.

        Args:
            email: User's email (normalized before sending)
            password: User's password

        Returns:
            AuthResponse with the issued token

        Raises:
            AuthError: wrapping the underlying ApiError
        """
        request = LoginRequest(email=normalize_email(email), password=password)
        logger.info(f"Attempting login for user: {request.email}")

        try:
            response = self._api.post(self._endpoints["login"], body=request,
                                      decoder=AuthResponse.from_dict)
        except ApiError as e:
            raise AuthError("log in", e) from e

        logger.info(f"Login successful for: {request.email}")
        return response

    def register(self, name: str, email: str, password: str) -> AuthResponse:
        """
        Create an account and obtain a bearer token.

        Args:
            name: Display name (trimmed before sending)
            email: User's email (normalized before sending)
            password: Chosen password

        Returns:
            AuthResponse with the issued token
        """
        request = SignupRequest(name=name.strip(), email=normalize_email(email), password=password)
        logger.info(f"Registering user: {request.email}")

        try:
            response = self._api.post(self._endpoints["register"], body=request,
                                      decoder=AuthResponse.from_dict)
        except ApiError as e:
            raise AuthError("register", e) from e

        logger.info(f"Registration successful for: {request.email}")
        return response

    def forgot_password(self, email: str) -> SuccessResponse:
        """Ask the server to email a 6-digit reset code."""
        request = ForgotPasswordRequest(email=normalize_email(email))
        logger.info(f"Requesting password reset code for: {request.email}")
        return self._post_for_message("request reset code", self._endpoints["forgot_password"], request)

    def verify_reset_code(self, email: str, code: str) -> SuccessResponse:
        """Check a reset code before asking for a new password."""
        request = VerifyResetCodeRequest(email=normalize_email(email), code=code.strip())
        logger.info(f"Verifying reset code for: {request.email}")
        return self._post_for_message("verify reset code", self._endpoints["verify_reset_code"], request)

    def reset_password(self, email: str, code: str, new_password: str) -> SuccessResponse:
        """Set a new password using a verified reset code."""
        request = ResetPasswordRequest(
            email=normalize_email(email),
            code=code.strip(),
            new_password=new_password,
        )
        logger.info(f"Resetting password for: {request.email}")
        return self._post_for_message("reset password", self._endpoints["reset_password"], request)

    def check_token(self) -> str:
        """
        Hit the protected test endpoint with the current token.

        Raises:
            AuthError: wrapping UnauthorizedError when the token is rejected
        """
        try:
            return self._api.get(self._endpoints["test"], response_type=RESPONSE_TEXT)
        except ApiError as e:
            raise AuthError("validate token", e) from e

    def _post_for_message(self, operation: str, path: str, request) -> SuccessResponse:
        try:
            text = self._api.post(path, body=request, response_type=RESPONSE_TEXT)
            response = SuccessResponse.from_text(text)
        except ApiError as e:
            raise AuthError(operation, e) from e
        except (ValueError, KeyError, TypeError) as e:
            raise AuthError(operation, DecodingError(e)) from e

        logger.info(f"{operation.capitalize()} succeeded: {response.message}")
        return response

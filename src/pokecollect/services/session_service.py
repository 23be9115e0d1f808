"""
Session service: the login/registration/logout coordinator.

Owns the session state, writes the bearer token to the secret store, and is
the only component that interprets authentication errors.
"""
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from pokecollect.api.auth_client import AuthClient
from pokecollect.api.errors import AuthError, UnauthorizedError, unwrap_error
from pokecollect.config.settings import settings
from pokecollect.core.event_bus import EventBus, EventTypes
from pokecollect.models.auth import AuthResponse
from pokecollect.state.session_state import SessionSnapshot, SessionState
from pokecollect.utils.error_translator import error_translator
from pokecollect.utils.logger import logger
from pokecollect.utils.security import CredentialStoreError, SecretStore
from pokecollect.utils.threading_utils import ApiWorker
from pokecollect.utils.validators import (
    validate_email,
    validate_login_password,
    validate_name,
    validate_password,
)


class SessionService:
    """Coordinates authentication and exposes observable session state."""

    def __init__(
        self,
        auth_client: AuthClient,
        secret_store: SecretStore,
        event_bus: EventBus,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self._auth_client = auth_client
        self._secret_store = secret_store
        self._event_bus = event_bus
        self._executor = executor
        self._state = SessionState(event_bus)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionSnapshot:
        return self._state.snapshot()

    @property
    def is_logged_in(self) -> bool:
        return self._state.is_logged_in

    def subscribe(self, callback: Callable[[SessionSnapshot], None]) -> Callable[[], None]:
        """Call ``callback`` with the new snapshot on every state change."""
        return self._event_bus.subscribe(EventTypes.SESSION_STATE_CHANGED, callback)

    def unsubscribe(self, callback: Callable[[SessionSnapshot], None]) -> None:
        self._event_bus.unsubscribe(EventTypes.SESSION_STATE_CHANGED, callback)

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def restore_session(self, blocking: Optional[bool] = None) -> Optional[Future]:
        """
        Restore a stored session on application start.

        By default the session is marked logged in as soon as a token is
        found and the token is verified in the background. With
        ``blocking`` the token is verified first.

        Args:
            blocking: Override settings.SESSION_VALIDATE_BLOCKING

        Returns:
            Future of the background validation, or None
        """
        if blocking is None:
            blocking = settings.SESSION_VALIDATE_BLOCKING

        if not self._secret_store.has():
            logger.info("No stored token found - user needs to log in")
            self._state.update(is_logged_in=False, current_user=None)
            return None

        if blocking:
            logger.info("Found stored token - validating before restoring session")
            self._state.update(is_loading=True)
            try:
                if self._check_token():
                    self._state.update(is_logged_in=True)
            finally:
                self._state.update(is_loading=False)
            return None

        logger.info("Found stored token - user appears to be logged in")
        self._state.update(is_logged_in=True)
        return ApiWorker(self.validate_session).start(self._executor)

    def validate_session(self) -> bool:
        """
        Verify the current token against the server.

        Only a rejected token ends the session; other failures are logged
        and the session is kept.

        Returns:
            True if the session is still logged in
        """
        if not self._state.is_logged_in or self.get_current_token() is None:
            self.logout()
            return False
        return self._check_token()

    def _check_token(self) -> bool:
        token = self.get_current_token()
        try:
            self._auth_client.check_token()
        except AuthError as e:
            if isinstance(unwrap_error(e), UnauthorizedError):
                if self.get_current_token() != token:
                    logger.info("Token replaced during validation, ignoring stale rejection")
                    return self._state.is_logged_in
                logger.warning("Token expired, logging out")
                self.logout()
                self._event_bus.publish(EventTypes.SESSION_EXPIRED)
                return False
            logger.warning(f"Token validation failed: {e}")
            return True

        logger.info("Token validation successful")
        return True

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def login(self, email: str, password: str) -> bool:
        """
        Log in with email and password.

        Returns:
            True on success; on failure ``state.error_message`` says why
        """
        return self._authenticate(
            [validate_email(email), validate_login_password(password)],
            lambda: self._auth_client.login(email, password),
        )

    def register(self, name: str, email: str, password: str) -> bool:
        """
        Create an account and log in.

        Returns:
            True on success; on failure ``state.error_message`` says why
        """
        return self._authenticate(
            [validate_name(name), validate_email(email), validate_password(password)],
            lambda: self._auth_client.register(name, email, password),
        )

    def _authenticate(self, checks, call: Callable[[], AuthResponse]) -> bool:
        self._state.update(is_loading=True, error_message=None)
        try:
            for is_valid, message in checks:
                if not is_valid:
                    logger.info(f"Form validation failed: {message}")
                    self._state.update(error_message=message)
                    return False

            try:
                response = call()
                self._secret_store.save(response.token)
            except (AuthError, CredentialStoreError) as e:
                message = error_translator.translate_auth_error(e)
                logger.error(f"Authentication error: {e}")
                self._state.update(error_message=message)
                self._event_bus.publish(EventTypes.LOGIN_FAILED, message)
                return False

            self._state.update(is_logged_in=True, current_user=response.user)
            self._event_bus.publish(EventTypes.LOGIN_SUCCESS, response.user)
            return True
        finally:
            self._state.update(is_loading=False)

    def logout(self) -> None:
        """Forget the token and end the session, even if deletion fails."""
        try:
            self._secret_store.delete()
            logger.info("Logout successful")
        except CredentialStoreError as e:
            logger.error(f"Error during logout: {e}")

        self._state.update(is_logged_in=False, current_user=None, error_message=None)
        self._event_bus.publish(EventTypes.LOGOUT)

    def clear_error(self) -> None:
        self._state.update(error_message=None)

    def get_current_token(self) -> Optional[str]:
        """Get the stored token, or None if absent or unreadable."""
        try:
            return self._secret_store.get()
        except CredentialStoreError as e:
            logger.error(f"Error retrieving token: {e}")
            return None

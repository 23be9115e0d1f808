"""
Security utilities for bearer token storage and data protection.

The client keeps exactly one secret, the session token, under a fixed
account key. ``SecretStore`` is the storage contract; the keyring backend is
the production default, the encrypted file backend covers hosts without a
usable OS vault, and the memory backend serves tests and ephemeral sessions.
"""
import os
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Optional, Dict, Mapping

import keyring
from keyring.errors import KeyringError, PasswordDeleteError
from cryptography.fernet import Fernet, InvalidToken

from pokecollect.config.settings import settings
from pokecollect.utils.logger import logger


class CredentialStoreError(Exception):
    """Base class for credential storage failures."""


class InvalidCredentialData(CredentialStoreError):
    def __init__(self, detail: str = "Invalid token data"):
        super().__init__(detail)


class CredentialSaveError(CredentialStoreError):
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to save token: {cause}")


class CredentialRetrieveError(CredentialStoreError):
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to retrieve token: {cause}")


class CredentialDeleteError(CredentialStoreError):
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to delete token: {cause}")


def _check_token(token) -> str:
    if not isinstance(token, str) or not token:
        raise InvalidCredentialData()
    return token


class SecretStore(ABC):
    """Single-slot storage for the session token."""

    def __init__(self, account_key: Optional[str] = None):
        self.account_key = account_key or settings.TOKEN_ACCOUNT_KEY

    @abstractmethod
    def save(self, token: str) -> None:
        """Store ``token``, replacing any previous one."""

    @abstractmethod
    def get(self) -> Optional[str]:
        """Return the stored token or None when the slot is empty."""

    @abstractmethod
    def delete(self) -> None:
        """Remove the stored token. Deleting an empty slot succeeds."""

    def has(self) -> bool:
        """Check if a token is stored."""
        try:
            return self.get() is not None
        except CredentialStoreError:
            return False


class KeyringSecretStore(SecretStore):
    """Token storage in the system credential vault."""

    def __init__(self, service_name: Optional[str] = None, account_key: Optional[str] = None):
        super().__init__(account_key)
        self.service_name = service_name or settings.CREDENTIAL_STORE_SERVICE

    def save(self, token: str) -> None:
        token = _check_token(token)
        try:
            # set_password updates the entry in place or creates it
            keyring.set_password(self.service_name, self.account_key, token)
        except KeyringError as e:
            raise CredentialSaveError(e) from e
        logger.debug("Token stored in system keyring")

    def get(self) -> Optional[str]:
        try:
            return keyring.get_password(self.service_name, self.account_key)
        except KeyringError as e:
            raise CredentialRetrieveError(e) from e

    def delete(self) -> None:
        try:
            keyring.delete_password(self.service_name, self.account_key)
        except PasswordDeleteError:
            pass  # Nothing stored
        except KeyringError as e:
            raise CredentialDeleteError(e) from e
        logger.debug("Token cleared from keyring")


class EncryptedFileSecretStore(SecretStore):
    """
    Token storage in a Fernet-encrypted local file.

    The encryption key is generated on first use and kept in a separate
    file; both files are written with owner-only permissions.
    """

    def __init__(
        self,
        token_file: Optional[Path] = None,
        key_file: Optional[Path] = None,
        account_key: Optional[str] = None,
    ):
        super().__init__(account_key)
        self.token_file = Path(token_file or settings.TOKEN_FILE)
        self.key_file = Path(key_file or settings.KEY_FILE)
        self._lock = Lock()

    def _write_private(self, path: Path, data: bytes):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        # Set restrictive permissions (Unix-like systems)
        if hasattr(os, 'chmod'):
            os.chmod(path, 0o600)

    def _load_key(self, create: bool) -> Optional[bytes]:
        if self.key_file.exists():
            return self.key_file.read_bytes().strip()
        if not create:
            return None
        key = Fernet.generate_key()
        self._write_private(self.key_file, key)
        logger.info(f"Generated token encryption key at {self.key_file}")
        return key

    def save(self, token: str) -> None:
        token = _check_token(token)
        with self._lock:
            try:
                fernet = Fernet(self._load_key(create=True))
                self._write_private(self.token_file, fernet.encrypt(token.encode('utf-8')))
            except (OSError, ValueError) as e:
                raise CredentialSaveError(e) from e
        logger.debug("Token stored in encrypted local file")

    def get(self) -> Optional[str]:
        with self._lock:
            try:
                if not self.token_file.exists():
                    return None
                key = self._load_key(create=False)
                if key is None:
                    raise CredentialRetrieveError(FileNotFoundError(str(self.key_file)))
                decrypted = Fernet(key).decrypt(self.token_file.read_bytes())
            except (OSError, ValueError, InvalidToken) as e:
                raise CredentialRetrieveError(e) from e
        try:
            return decrypted.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidCredentialData() from e

    def delete(self) -> None:
        with self._lock:
            try:
                self.token_file.unlink(missing_ok=True)
            except OSError as e:
                raise CredentialDeleteError(e) from e
        logger.debug("Local token file deleted")


class MemorySecretStore(SecretStore):
    """Token storage that lives only as long as the process."""

    def __init__(self, account_key: Optional[str] = None):
        super().__init__(account_key)
        self._items: Dict[str, str] = {}
        self._lock = Lock()

    def save(self, token: str) -> None:
        token = _check_token(token)
        with self._lock:
            self._items[self.account_key] = token

    def get(self) -> Optional[str]:
        with self._lock:
            return self._items.get(self.account_key)

    def delete(self) -> None:
        with self._lock:
            self._items.pop(self.account_key, None)


def create_secret_store(backend: Optional[str] = None) -> SecretStore:
    """Build the secret store selected by ``backend`` (or settings)."""
    backend = (backend or settings.CREDENTIAL_BACKEND).lower()
    if backend == "keyring":
        return KeyringSecretStore()
    if backend == "file":
        return EncryptedFileSecretStore()
    if backend == "memory":
        logger.warning("Using in-memory token storage; sessions will not persist")
        return MemorySecretStore()
    raise ValueError(f"Unknown credential backend: {backend}")


class DataProtection:
    """Utility class for data protection."""

    @staticmethod
    def mask_sensitive_data(data: str, mask_char: str = "*", visible_chars: int = 4) -> str:
        """
        Mask sensitive data for display purposes.

        Args:
            data: Sensitive data to mask
            mask_char: Character to use for masking
            visible_chars: Number of characters to show at the end

        Returns:
            Masked string
        """
        if not data or len(data) <= visible_chars:
            return mask_char * len(data) if data else ""

        return mask_char * (len(data) - visible_chars) + data[-visible_chars:]

    @staticmethod
    def mask_headers(headers: Mapping[str, str]) -> Dict[str, str]:
        """Copy request headers with the Authorization value masked."""
        masked = dict(headers)
        auth = masked.get("Authorization")
        if auth:
            scheme, _, credential = auth.partition(" ")
            masked["Authorization"] = f"{scheme} {DataProtection.mask_sensitive_data(credential)}"
        return masked

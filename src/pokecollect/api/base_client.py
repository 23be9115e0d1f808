"""
Base API Client with HTTP request handling and authentication.
"""
import json
from enum import Enum
from typing import Any, Callable, Dict, Optional, TypeVar
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter
from requests.exceptions import (
    ConnectionError,
    InvalidSchema,
    InvalidURL,
    MissingSchema,
    RequestException,
    Timeout,
)
from urllib3.util.retry import Retry

from pokecollect.api.errors import (
    ApiError,
    DecodingError,
    ForbiddenError,
    InvalidURLError,
    NetworkError,
    NoDataError,
    NotFoundError,
    RequestTimeoutError,
    ServerError,
    UnauthorizedError,
    UnknownError,
)
from pokecollect.config.settings import settings
from pokecollect.models.auth import ErrorResponse
from pokecollect.utils.formatters import truncate_text
from pokecollect.utils.logger import logger
from pokecollect.utils.security import CredentialStoreError, DataProtection, SecretStore

T = TypeVar("T")

RESPONSE_JSON = "json"
RESPONSE_TEXT = "text"


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def extract_error_message(text: str) -> Optional[str]:
    """Pull the message out of an error envelope, else return the raw body."""
    try:
        return ErrorResponse.from_dict(json.loads(text)).message
    except (ValueError, KeyError, TypeError):
        return text or None


def classify_status(status_code: int, text: str = "") -> Optional[ApiError]:
    """
    Map an HTTP status to the error it represents.

    Returns:
        None for 2xx, otherwise the ApiError to raise
    """
    if 200 <= status_code <= 299:
        return None
    if status_code == 401:
        return UnauthorizedError()
    if status_code == 403:
        return ForbiddenError()
    if status_code == 404:
        return NotFoundError()
    if 400 <= status_code <= 599:
        return ServerError(status_code, extract_error_message(text))
    return UnknownError(status_code)


def _redact(body: Any) -> Any:
    if isinstance(body, dict):
        return {
            key: "***" if "password" in key.lower() else _redact(value)
            for key, value in body.items()
        }
    return body


class ApiClient:
    """
    HTTP request executor shared by every resource client.

    Each call is a single attempt: the bearer token is read from the secret
    store, the status is classified, and either a decoded value is returned
    or an ApiError is raised.
    """

    def __init__(
        self,
        secret_store: SecretStore,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the API client.

        Args:
            secret_store: Where the bearer token is read from
            base_url: Server root (defaults to settings.API_BASE_URL)
            timeout: Request timeout in seconds (defaults to settings.API_TIMEOUT)
            session: Optional pre-built HTTP session
        """
        self._secret_store = secret_store
        self.base_url = (base_url if base_url is not None else settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT
        self._session = session if session is not None else requests.Session()
        self._setup_session()

    def _setup_session(self):
        """Configure HTTP session with pooling and default headers."""
        retry_strategy = Retry(
            total=settings.API_RETRY_ATTEMPTS,
            read=False,
            raise_on_status=False,
        )

        adapter = HTTPAdapter(
            max_retries=retry_strategy,
            pool_connections=settings.API_POOL_CONNECTIONS,
            pool_maxsize=settings.API_POOL_MAXSIZE,
        )

        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

        self._session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    def close(self):
        self._session.close()

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------

    def build_url(self, path: str) -> str:
        url = f"{self.base_url}{path}"
        try:
            parsed = urlparse(url)
        except ValueError:
            raise InvalidURLError(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidURLError(url)
        return url

    def get_access_token(self) -> Optional[str]:
        """Get the stored token, treating a storage failure as no token."""
        try:
            return self._secret_store.get()
        except CredentialStoreError as e:
            logger.warning(f"Could not read stored token: {e}")
            return None

    def _build_headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        token = self.get_access_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _encode_body(body: Any) -> Optional[bytes]:
        if body is None:
            return None
        if hasattr(body, "to_dict"):
            body = body.to_dict()
        return json.dumps(body).encode("utf-8")

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def request(
        self,
        path: str,
        method: HTTPMethod = HTTPMethod.GET,
        body: Any = None,
        decoder: Optional[Callable[[Any], T]] = None,
        response_type: Optional[str] = RESPONSE_JSON,
    ) -> Any:
        """
        Make an HTTP request and decode the response.

        Args:
            path: Server-relative path (e.g. "/api/cards/set/sv6")
            method: HTTP method
            body: JSON-serializable payload or model with ``to_dict``
            decoder: Converts parsed JSON into the expected type
            response_type: "json", "text", or None to ignore the body

        Returns:
            Decoded value, response text, or None

        Raises:
            ApiError: on invalid URL, transport failure, error status or
                undecodable body
        """
        method = HTTPMethod(method)
        url = self.build_url(path)
        headers = self._build_headers()
        data = self._encode_body(body)

        self._log_request(method, url, headers, body)

        try:
            response = self._session.request(
                method.value,
                url,
                data=data,
                headers=headers,
                timeout=self.timeout,
            )
        except Timeout as e:
            # ConnectTimeout is also a ConnectionError; timeouts win
            logger.error(f"Timeout for {method.value} {path}: {e}")
            raise RequestTimeoutError() from e
        except (InvalidURL, MissingSchema, InvalidSchema) as e:
            raise InvalidURLError(url) from e
        except ConnectionError as e:
            logger.error(f"Connection error for {method.value} {path}: {e}")
            raise NetworkError(e) from e
        except RequestException as e:
            logger.error(f"Request error for {method.value} {path}: {e}")
            raise NetworkError(e) from e

        self._log_response(response)

        error = classify_status(response.status_code, response.text)
        if error is not None:
            logger.warning(f"{method.value} {path} failed: {error}")
            raise error

        return self._decode(response, decoder, response_type)

    @staticmethod
    def _decode(response: requests.Response, decoder, response_type: Optional[str]) -> Any:
        if response_type is None:
            return None
        if response_type == RESPONSE_TEXT:
            return response.text
        if not response.content or not response.content.strip():
            raise NoDataError()
        try:
            payload = response.json()
            return decoder(payload) if decoder else payload
        except (ValueError, KeyError, TypeError) as e:
            raise DecodingError(e) from e

    def get(self, path: str, decoder: Optional[Callable[[Any], T]] = None, **kwargs) -> Any:
        return self.request(path, HTTPMethod.GET, decoder=decoder, **kwargs)

    def post(self, path: str, body: Any = None, decoder: Optional[Callable[[Any], T]] = None, **kwargs) -> Any:
        return self.request(path, HTTPMethod.POST, body=body, decoder=decoder, **kwargs)

    def put(self, path: str, body: Any = None, decoder: Optional[Callable[[Any], T]] = None, **kwargs) -> Any:
        return self.request(path, HTTPMethod.PUT, body=body, decoder=decoder, **kwargs)

    def patch(self, path: str, body: Any = None, decoder: Optional[Callable[[Any], T]] = None, **kwargs) -> Any:
        return self.request(path, HTTPMethod.PATCH, body=body, decoder=decoder, **kwargs)

    def delete(self, path: str) -> None:
        """Make a DELETE request that expects no response body."""
        self.request(path, HTTPMethod.DELETE, response_type=None)

    # ------------------------------------------------------------------
    # Debug logging
    # ------------------------------------------------------------------

    def _log_request(self, method: HTTPMethod, url: str, headers: Dict[str, str], body: Any):
        if not settings.DEBUG:
            return
        logger.debug(f"[ApiClient] Request: {method.value} {url}")
        logger.debug(f"[ApiClient] Headers: {DataProtection.mask_headers(headers)}")
        if body is not None:
            payload = body.to_dict() if hasattr(body, "to_dict") else body
            logger.debug(f"[ApiClient] Body: {json.dumps(_redact(payload))}")

    def _log_response(self, response: requests.Response):
        if not settings.DEBUG:
            return
        logger.debug(f"[ApiClient] Response: {response.status_code}")
        logger.debug(f"[ApiClient] Headers: {dict(response.headers)}")
        if response.content:
            logger.debug(f"[ApiClient] Body: {truncate_text(response.text, 2000)}")

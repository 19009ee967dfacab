"""Internal HTTP handling for the Meltdown Manager client.

Wraps httpx.Client with error mapping and optional retry with exponential
backoff. This is an internal module; import from `client` instead.
"""

import logging
import time
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    BadRequestError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)

logger = logging.getLogger(__name__)

HttpMethod = Literal["GET", "POST"]

# Status codes that trigger automatic retry (when retry is enabled)
RETRYABLE_STATUS_CODES = {502, 503, 504}

DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None, Any]:
    """Extract (message, error_type, body) from an error response.

    Understands both the server's own error bodies ({"error", "detail"})
    and FastAPI's request-validation bodies (detail is a list).
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return (text or f"HTTP {response.status_code} error"), None, text

    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, str):
            return detail, body.get("error"), body
        if isinstance(detail, list):
            messages = [
                f"{err.get('loc', ['unknown'])[-1]}: {err.get('msg', 'invalid')}"
                for err in detail
            ]
            return "; ".join(messages), "validation_error", body
        if "error" in body:
            return str(body["error"]), None, body
    return str(body), None, body


def _raise_for_status(response: httpx.Response) -> None:
    """Raise the exception matching an error status code.

    Raises:
        BadRequestError: For HTTP 400.
        NotFoundError: For HTTP 404.
        ConflictError: For HTTP 409.
        ValidationError: For HTTP 422.
        ServerError: For HTTP 5xx.
        APIError: For any other 4xx.
    """
    if response.is_success:
        return

    message, error_type, body = _parse_error_response(response)
    status_code = response.status_code

    if status_code == 400:
        raise BadRequestError(message, error_type=error_type, response_body=body)
    if status_code == 404:
        raise NotFoundError(message, error_type=error_type, response_body=body)
    if status_code == 409:
        raise ConflictError(message, error_type=error_type, response_body=body)
    if status_code == 422:
        errors = []
        if isinstance(body, dict):
            errors = body.get("validation_errors") or (
                body["detail"] if isinstance(body.get("detail"), list) else []
            )
        raise ValidationError(message, errors=errors, response_body=body)
    if status_code >= 500:
        raise ServerError(message, status_code=status_code, error_type=error_type, response_body=body)
    raise APIError(message, status_code, error_type=error_type, response_body=body)


def _calculate_backoff(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Exponential backoff delay for a retry attempt, capped at the maximum."""
    return min(base * (2**attempt), DEFAULT_RETRY_BACKOFF_MAX)


class HTTPClient:
    """Synchronous HTTP client shared by every sub-client.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: The base URL for all API requests.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on transient failures.
            max_retries: Maximum number of retry attempts.
            transport: Custom transport (e.g., MockTransport for testing).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make a request and return the parsed JSON body.

        Args:
            method: GET or POST.
            path: The URL path (appended to base_url).
            params: Query parameters; None values are dropped.
            json: JSON body to send.

        Returns:
            The parsed JSON body, or None for empty responses.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        url = f"{self.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        attempts = self.max_retries + 1 if self.retry_enabled else 1
        for attempt in range(attempts):
            is_last = attempt >= attempts - 1
            try:
                response = self._client.request(method=method, url=path, params=params, json=json)
            except httpx.ConnectError as e:
                if is_last:
                    raise ConnectionError(f"Failed to connect to {url}", url=url, cause=e) from e
                logger.debug(f"Connect to {url} failed, retrying (attempt {attempt + 1})")
                time.sleep(_calculate_backoff(attempt))
                continue
            except httpx.TimeoutException as e:
                if is_last:
                    raise TimeoutError(
                        f"Request to {url} timed out", timeout=self.timeout, url=url
                    ) from e
                logger.debug(f"Request to {url} timed out, retrying (attempt {attempt + 1})")
                time.sleep(_calculate_backoff(attempt))
                continue

            if response.status_code in RETRYABLE_STATUS_CODES and not is_last:
                time.sleep(_calculate_backoff(attempt))
                continue

            _raise_for_status(response)
            return response.json() if response.content else None

        raise RuntimeError("Unexpected exit from request retry loop")

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return self.request("POST", path, params=params, json=json)

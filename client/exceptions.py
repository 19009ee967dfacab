"""Exception hierarchy for the Meltdown Manager API client.

Exception Hierarchy:
    MeltdownClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    └── APIError - Server returned an error response
        ├── BadRequestError (HTTP 400)
        ├── NotFoundError (HTTP 404)
        ├── ConflictError (HTTP 409)
        ├── ValidationError (HTTP 422)
        └── ServerError (HTTP 5xx)

Rejected game commands (not enough cash, session over) are NOT errors: the
server answers 200 with ``accepted=False``. These exceptions only cover
transport failures and genuine API errors.

Example:
    Catching specific errors::

        try:
            client.simulation.tick(count=10)
        except ConflictError:
            # Session not started yet
            client.simulation.start()
"""

from typing import Any


class MeltdownClientError(Exception):
    """Base exception for all client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(MeltdownClientError):
    """Failed to connect to the server.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to connect.
        cause: The underlying transport exception.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(MeltdownClientError):
    """Request took longer than the configured timeout.

    Attributes:
        message: Human-readable error description.
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        if self.timeout is not None:
            return f"{self.message} (timeout: {self.timeout}s)"
        return self.message


class APIError(MeltdownClientError):
    """Server returned an error status code.

    Attributes:
        message: Error detail from the response body.
        status_code: HTTP status code.
        error_type: Error label from the response body (if available).
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        if self.error_type:
            return f"[HTTP {self.status_code}] [{self.error_type}] {self.message}"
        return f"[HTTP {self.status_code}] {self.message}"


class BadRequestError(APIError):
    """Business-rule violation (HTTP 400), e.g. an unknown difficulty."""

    def __init__(self, message: str, error_type: str | None = None, response_body: Any = None) -> None:
        super().__init__(message, 400, error_type=error_type, response_body=response_body)


class NotFoundError(APIError):
    """Resource not found (HTTP 404), e.g. a chapter index past the campaign."""

    def __init__(self, message: str, error_type: str | None = None, response_body: Any = None) -> None:
        super().__init__(message, 404, error_type=error_type, response_body=response_body)


class ConflictError(APIError):
    """State conflict (HTTP 409).

    Raised when the session is in the wrong lifecycle state: starting a
    session that is already running, or ticking one that was never started.
    """

    def __init__(self, message: str, error_type: str | None = None, response_body: Any = None) -> None:
        super().__init__(message, 409, error_type=error_type, response_body=response_body)


class ValidationError(APIError):
    """Request body failed validation (HTTP 422).

    Attributes:
        errors: Field-level validation errors from the response.
    """

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
        response_body: Any = None,
    ) -> None:
        self.errors = errors or []
        super().__init__(message, 422, error_type="validation_error", response_body=response_body)


class ServerError(APIError):
    """Server-side error (HTTP 5xx)."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_type: str | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(message, status_code, error_type=error_type, response_body=response_body)

"""
Error types shared across the service.

Third-party failures (Glassdoor, LinkedIn Jobs, JSearch, NewsAPI) are raised
as APIError subclasses so callers can tell a transient outage from a bad key.
Whether a failure degrades to an empty result or propagates is the caller's
decision.

NotAuthenticatedError is separate: user-owned mutations raise it when no
user is present and routers turn it into HTTP 401.
"""

from typing import Optional, Dict, Any


class NotAuthenticatedError(Exception):
    """A mutation that requires a signed-in user was called without one."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)
        self.message = message


class APIError(Exception):
    """
    A call to a third-party provider failed.

    ``retryable`` tells BaseAPIClient whether another attempt is worthwhile;
    ``response_data`` keeps the decoded provider payload when there was one.
    """

    retryable_default = False

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
        retryable: Optional[bool] = None,
    ):
        super().__init__(message)
        self.message = message
        self.source = source
        self.status_code = status_code
        self.response_data = response_data
        self.retryable = self.retryable_default if retryable is None else retryable

    def __str__(self) -> str:
        text = f"[{self.source}] {self.message}" if self.source else self.message
        if self.status_code:
            text += f" (HTTP {self.status_code})"
        return text


class RetryableError(APIError):
    """Transient: 5xx, timeout or dropped connection."""

    retryable_default = True


class RateLimitError(APIError):
    """
    Provider quota exhausted (HTTP 429).

    RapidAPI plans meter per key, so a burst from one endpoint throttles the
    rest. ``retry_after`` comes from the Retry-After header when sent.
    """

    retryable_default = True

    def __init__(self, message: str, source: Optional[str] = None, retry_after: Optional[int] = None):
        super().__init__(message, source=source, status_code=429)
        self.retry_after = retry_after or 60


class FatalError(APIError):
    """Retrying will not help: bad request, forbidden, missing resource."""


class AuthenticationError(FatalError):
    """Provider rejected the key (HTTP 401)."""

    def __init__(self, message: str = "Authentication failed - check API key", source: Optional[str] = None):
        super().__init__(message, source=source, status_code=401)


class NotFoundError(FatalError):
    """Provider has no such resource (HTTP 404)."""

    def __init__(self, message: str = "Resource not found", source: Optional[str] = None):
        super().__init__(message, source=source, status_code=404)


class ConfigurationError(FatalError):
    """A key or setting the call depends on is not configured."""

    def __init__(self, message: str, source: Optional[str] = None, missing_config: Optional[str] = None):
        super().__init__(message, source=source)
        self.missing_config = missing_config


def classify_http_error(
    status_code: int, response_text: str = "", source: Optional[str] = None
) -> APIError:
    """Map an HTTP error status onto the APIError subclass callers act on."""
    snippet = response_text[:200]

    if status_code == 429:
        return RateLimitError(f"Rate limited: {snippet}", source=source)
    if status_code == 401:
        return AuthenticationError(f"Authentication failed: {snippet}", source=source)
    if status_code == 404:
        return NotFoundError(f"Not found: {snippet}", source=source)
    if status_code in (400, 403):
        label = "Bad request" if status_code == 400 else "Access forbidden"
        return FatalError(f"{label}: {snippet}", source=source, status_code=status_code)
    if 500 <= status_code < 600:
        return RetryableError(f"Server error: {snippet}", source=source, status_code=status_code)

    return APIError(f"HTTP error {status_code}: {snippet}", source=source, status_code=status_code)

"""Classify generation errors so callers know when to ask for a new key."""

import httpx

from ..models.enums import ErrorKind
from ..utils.errors import AuthenticationError, CredentialError, RateLimitError

# Provider error formats carry no stable code, so messages are matched
AUTH_MARKERS = (
    "requested entity was not found",
    "403",
    "forbidden",
    "permission denied",
    "permission_denied",
    "api key not valid",
    "api_key_invalid",
    "401",
    "unauthenticated",
)

TRANSIENT_MARKERS = (
    "429",
    "rate limit",
    "resource exhausted",
    "resource_exhausted",
    "quota",
    "503",
    "unavailable",
    "timed out",
    "timeout",
    "deadline",
)


def classify_error(error: BaseException) -> ErrorKind:
    """
    Classify a failed generation.

    Typed errors decide first; otherwise the message is scanned, auth
    markers taking precedence over transient ones.

    Args:
        error: Exception surfaced by the synthesizer

    Returns:
        ErrorKind
    """
    if isinstance(error, (AuthenticationError, CredentialError)):
        return ErrorKind.AUTH_FAILURE
    if isinstance(error, (RateLimitError, httpx.TimeoutException, httpx.TransportError)):
        return ErrorKind.TRANSIENT_FAILURE

    message = str(error).lower()

    if any(marker in message for marker in AUTH_MARKERS):
        return ErrorKind.AUTH_FAILURE
    if any(marker in message for marker in TRANSIENT_MARKERS):
        return ErrorKind.TRANSIENT_FAILURE

    return ErrorKind.UNKNOWN


def is_auth_failure(error: BaseException) -> bool:
    """True when the error suggests the selected key is unusable."""
    return classify_error(error) == ErrorKind.AUTH_FAILURE

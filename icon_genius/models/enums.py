"""Enumerations for the icon generator."""

from enum import Enum


class Resolution(str, Enum):
    """Output pixel-density class, valued as the API's imageSize."""
    STANDARD = "1K"
    HIGH = "2K"


class AccessTier(str, Enum):
    """Which model quality the caller is willing/able to request."""
    FREE = "free"
    PRO = "pro"


class ErrorKind(str, Enum):
    """Coarse classification of a failed generation."""
    AUTH_FAILURE = "auth_failure"
    TRANSIENT_FAILURE = "transient_failure"
    UNKNOWN = "unknown"


class StudioStatus(str, Enum):
    """Status of the current generation in a studio session."""
    IDLE = "idle"
    ENHANCING_PROMPT = "enhancing_prompt"
    GENERATING_IMAGE = "generating_image"
    SUCCESS = "success"
    ERROR = "error"

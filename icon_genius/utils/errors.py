"""Custom exception classes for the icon generator."""


class IconGeniusError(Exception):
    """Base exception for all icon generator errors."""
    pass


class ConfigurationError(IconGeniusError):
    """Configuration or initialization errors."""
    pass


class APIError(IconGeniusError):
    """Base class for API-related errors."""
    pass


class ProviderError(APIError):
    """Generic provider API error with status code."""

    def __init__(self, provider: str, message: str, status_code: int = None):
        self.provider = provider
        self.status_code = status_code
        if status_code is not None:
            super().__init__(f"{provider} error ({status_code}): {message}")
        else:
            super().__init__(f"{provider} error: {message}")


class AuthenticationError(ProviderError):
    """API authentication failed."""

    def __init__(self, provider: str, message: str = "Authentication failed", status_code: int = 401):
        super().__init__(provider, message, status_code)


class RateLimitError(ProviderError):
    """API rate limit exceeded."""

    def __init__(self, provider: str, retry_after: int = None, message: str = "Rate limit exceeded"):
        self.retry_after = retry_after
        if retry_after:
            message += f", retry after {retry_after}s"
        super().__init__(provider, message, 429)


class GenerationError(IconGeniusError):
    """Errors during image synthesis."""
    pass


class NoImageDataError(GenerationError):
    """Model responded but no part carried inline image data."""
    pass


class GenerationInProgressError(IconGeniusError):
    """A generation is already running for this session."""
    pass


class CredentialError(IconGeniusError):
    """No usable API credential is available."""
    pass


class ImageProcessingError(IconGeniusError):
    """Error processing image data."""
    pass

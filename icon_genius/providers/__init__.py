"""API provider clients for external services."""

from .gemini import GeminiClient
from .credentials import (
    CredentialProvider,
    EnvCredentialProvider,
    StaticCredentialProvider,
)

__all__ = [
    "GeminiClient",
    "CredentialProvider",
    "EnvCredentialProvider",
    "StaticCredentialProvider",
]

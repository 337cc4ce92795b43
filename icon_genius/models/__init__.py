"""Data models and schemas for the icon generator."""

from .schemas import (
    GenerationRequest,
    EnhancementResult,
    IconArtifact,
    StudioSettings,
    GenerationOutcome,
)
from .enums import (
    Resolution,
    AccessTier,
    ErrorKind,
    StudioStatus,
)

__all__ = [
    "GenerationRequest",
    "EnhancementResult",
    "IconArtifact",
    "StudioSettings",
    "GenerationOutcome",
    "Resolution",
    "AccessTier",
    "ErrorKind",
    "StudioStatus",
]

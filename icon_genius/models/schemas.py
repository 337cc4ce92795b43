"""Pydantic schemas for data validation."""

import uuid
from typing import Optional
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import AccessTier, ErrorKind, Resolution, StudioStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GenerationRequest(BaseModel):
    """A user's icon request."""
    model_config = ConfigDict(frozen=True)

    prompt: str
    access_tier: AccessTier = AccessTier.PRO

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, value: str) -> str:
        # Kept verbatim; only emptiness is judged on the stripped text
        if not value.strip():
            raise ValueError("prompt must not be empty")
        return value


class EnhancementResult(BaseModel):
    """Result of prompt enhancement.

    Field aliases match the JSON the text model is asked to return.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    refined_prompt: str = Field(..., min_length=1, alias="refinedPrompt")
    suggested_resolution: Resolution = Field(..., alias="suggestedSize")
    style_label: str = Field(..., min_length=1, alias="styleDescription")

    @field_validator("refined_prompt", "style_label")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class IconArtifact(BaseModel):
    """A generated icon, as shown to the user and kept in the library."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    prompt: str
    original_prompt: str
    base64_data: str
    created_at: datetime = Field(default_factory=_utcnow)
    resolution: Resolution


class StudioSettings(BaseModel):
    """User-adjustable studio settings."""
    access_tier: AccessTier = AccessTier.PRO


class GenerationOutcome(BaseModel):
    """Final result of one studio generation attempt."""
    status: StudioStatus
    icon: Optional[IconArtifact] = None
    enhancement: Optional[EnhancementResult] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    processing_time_seconds: Optional[float] = None

"""Studio session: drives one user's generations, key state and library."""

import time
from pathlib import Path
from typing import Optional, Union

from .prompt_enhancer import PromptEnhancer
from .image_synthesizer import ImageSynthesizer
from .classifier import classify_error
from .library import IconLibrary
from ..providers.credentials import CredentialProvider
from ..models.schemas import (
    EnhancementResult,
    GenerationOutcome,
    GenerationRequest,
    IconArtifact,
    StudioSettings,
)
from ..models.enums import AccessTier, ErrorKind, Resolution, StudioStatus
from ..utils.logger import get_logger
from ..utils.errors import GenerationInProgressError
from ..utils.images import save_png

logger = get_logger(__name__)

LIBRARY_STYLE_LABEL = "From Library"
DEFAULT_ERROR_MESSAGE = "Something went wrong during generation."


def resolve_resolution(suggested: Resolution, access_tier: AccessTier) -> Resolution:
    """Resolution actually requested: the free tier is held to standard."""
    if access_tier == AccessTier.FREE:
        return Resolution.STANDARD
    return suggested


class IconStudio:
    """Runs the enhance → synthesize flow for a single user session.

    Only one generation may be in flight at a time. Failures end the attempt
    with status ERROR; auth-like failures also clear ``has_key`` so the host
    can prompt for a new key.
    """

    def __init__(
        self,
        enhancer: PromptEnhancer,
        synthesizer: ImageSynthesizer,
        credentials: CredentialProvider,
        library: Optional[IconLibrary] = None,
        settings: Optional[StudioSettings] = None,
    ):
        self.enhancer = enhancer
        self.synthesizer = synthesizer
        self.credentials = credentials
        self.library = library if library is not None else IconLibrary()
        self.settings = settings or StudioSettings()

        self.status = StudioStatus.IDLE
        self.has_key = False
        self.current_icon: Optional[IconArtifact] = None
        self.enhancement: Optional[EnhancementResult] = None
        self.error_message: Optional[str] = None
        self._in_flight = False

    @property
    def is_generating(self) -> bool:
        return self._in_flight

    async def check_key(self) -> bool:
        """Ask the host whether a key is selected."""
        try:
            self.has_key = await self.credentials.has_selected_key()
        except Exception as e:
            logger.error(f"Error checking for API key: {e}", extra={"error": str(e)})
            self.has_key = False
        return self.has_key

    async def connect(self):
        """Let the user pick a key; the dialog outcome is assumed successful."""
        try:
            await self.credentials.open_select_key()
        except Exception as e:
            logger.error(f"Error selecting key: {e}", extra={"error": str(e)})
            return
        self.has_key = True

    def update_settings(self, settings: StudioSettings):
        self.settings = settings
        logger.info(
            "Settings updated",
            extra={"access_tier": settings.access_tier.value}
        )

    async def generate(self, prompt: str) -> Optional[GenerationOutcome]:
        """
        Generate an icon from a raw prompt.

        Args:
            prompt: User's request; blank prompts are ignored

        Returns:
            GenerationOutcome, or None for a blank prompt

        Raises:
            GenerationInProgressError: If a generation is already running
        """
        if not prompt or not prompt.strip():
            return None

        if self._in_flight:
            raise GenerationInProgressError("A generation is already in progress")

        request = GenerationRequest(prompt=prompt, access_tier=self.settings.access_tier)

        self._in_flight = True
        self.status = StudioStatus.ENHANCING_PROMPT
        self.error_message = None
        self.enhancement = None
        self.current_icon = None
        start_time = time.time()

        try:
            enhancement = await self.enhancer.enhance(request.prompt)
            self.enhancement = enhancement

            resolution = resolve_resolution(
                enhancement.suggested_resolution, request.access_tier
            )

            self.status = StudioStatus.GENERATING_IMAGE
            base64_data, rendered_resolution = await self.synthesizer.synthesize_with_resolution(
                enhancement.refined_prompt,
                resolution,
                request.access_tier,
            )

            icon = IconArtifact(
                prompt=enhancement.refined_prompt,
                original_prompt=request.prompt,
                base64_data=base64_data,
                resolution=rendered_resolution,
            )

        except Exception as e:
            return self._fail(e, start_time)

        finally:
            self._in_flight = False

        self.current_icon = icon
        self.status = StudioStatus.SUCCESS
        processing_time = time.time() - start_time

        logger.info(
            "Icon generated",
            extra={
                "icon_id": icon.id,
                "resolution": icon.resolution.value,
                "access_tier": request.access_tier.value,
                "processing_time_seconds": round(processing_time, 2),
            }
        )

        return GenerationOutcome(
            status=StudioStatus.SUCCESS,
            icon=icon,
            enhancement=self.enhancement,
            processing_time_seconds=processing_time,
        )

    def _fail(self, error: Exception, start_time: float) -> GenerationOutcome:
        message = str(error) or DEFAULT_ERROR_MESSAGE
        error_kind = classify_error(error)

        self.status = StudioStatus.ERROR
        self.error_message = message

        if error_kind == ErrorKind.AUTH_FAILURE:
            # Forces key re-selection
            self.has_key = False

        logger.error(
            f"Generation failed: {message}",
            extra={
                "error": message,
                "error_type": type(error).__name__,
                "error_kind": error_kind.value,
            }
        )

        return GenerationOutcome(
            status=StudioStatus.ERROR,
            enhancement=self.enhancement,
            error=message,
            error_kind=error_kind,
            processing_time_seconds=time.time() - start_time,
        )

    def save_to_library(self) -> bool:
        """Save the current icon; returns False if nothing new was saved."""
        if self.current_icon is None:
            return False
        return self.library.add(self.current_icon)

    def delete_from_library(self, icon_id: str) -> bool:
        return self.library.remove(icon_id)

    def select_from_library(self, icon_id: str) -> Optional[IconArtifact]:
        """Make a saved icon the current one."""
        icon = self.library.get(icon_id)
        if icon is None:
            return None

        self.current_icon = icon
        self.status = StudioStatus.SUCCESS
        self.error_message = None
        self.enhancement = EnhancementResult(
            refined_prompt=icon.prompt,
            suggested_resolution=icon.resolution,
            style_label=LIBRARY_STYLE_LABEL,
        )
        return icon

    def download_icon(self, directory: Union[str, Path] = ".") -> Optional[Path]:
        """Write the current icon as icon-genius-<id>.png."""
        if self.current_icon is None:
            return None
        path = Path(directory) / f"icon-genius-{self.current_icon.id}.png"
        return save_png(self.current_icon.base64_data, path)

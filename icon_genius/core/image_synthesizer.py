"""Image synthesis with a single same-provider fallback."""

from typing import Any, Dict, List, Optional, Tuple

from ..providers.gemini import GeminiClient
from ..models.enums import AccessTier, Resolution
from ..utils.logger import get_logger
from ..utils.errors import NoImageDataError

logger = get_logger(__name__)


def find_inline_image(parts: List[Dict[str, Any]]) -> Optional[str]:
    """Return the payload of the first part carrying inline image data."""
    for part in parts:
        if not isinstance(part, dict):
            continue
        inline_data = part.get("inlineData") or {}
        if inline_data.get("data"):
            return inline_data["data"]
    return None


class ImageSynthesizer:
    """Renders refined prompts into square icon images.

    The pro tier tries the high-fidelity model first and falls back once to
    the fast model; the free tier goes straight to the fast model.
    """

    def __init__(
        self,
        gemini_client: GeminiClient,
        primary_model: str,
        secondary_model: str,
        aspect_ratio: str = "1:1",
    ):
        """
        Initialize image synthesizer.

        Args:
            gemini_client: Gemini API client
            primary_model: High-fidelity image model (accepts a resolution)
            secondary_model: Fast image model (no resolution parameter)
            aspect_ratio: Fixed aspect ratio for every request
        """
        self.client = gemini_client
        self.primary_model = primary_model
        self.secondary_model = secondary_model
        self.aspect_ratio = aspect_ratio

    async def synthesize(
        self,
        refined_prompt: str,
        resolution: Resolution,
        access_tier: AccessTier = AccessTier.PRO,
    ) -> str:
        """
        Generate an icon image.

        Args:
            refined_prompt: Prompt from the enhancer
            resolution: Resolution forwarded to the primary model
            access_tier: PRO starts at the primary model, FREE at the secondary

        Returns:
            Base64 image payload

        Raises:
            Exception: The primary attempt's error when the fallback also fails,
                or the secondary's error on the free tier
        """
        payload, _ = await self.synthesize_with_resolution(
            refined_prompt, resolution, access_tier
        )
        return payload

    async def synthesize_with_resolution(
        self,
        refined_prompt: str,
        resolution: Resolution,
        access_tier: AccessTier = AccessTier.PRO,
    ) -> Tuple[str, Resolution]:
        """Like ``synthesize``, but also returns the resolution actually rendered.

        The secondary model takes no resolution override, so an image it
        produced is always STANDARD.
        """
        if access_tier == AccessTier.FREE:
            return await self._generate_secondary(refined_prompt), Resolution.STANDARD

        try:
            payload = await self._generate_primary(refined_prompt, resolution)
            return payload, Resolution(resolution)
        except Exception as primary_error:
            logger.warning(
                f"Primary model failed, falling back to {self.secondary_model}",
                extra={
                    "primary_model": self.primary_model,
                    "secondary_model": self.secondary_model,
                    "error": str(primary_error),
                    "error_type": type(primary_error).__name__,
                }
            )

            try:
                payload = await self._generate_secondary(refined_prompt)
            except Exception as fallback_error:
                logger.error(
                    "Fallback model failed too, surfacing primary error",
                    extra={
                        "primary_error": str(primary_error),
                        "fallback_error": str(fallback_error),
                    }
                )
                raise primary_error
            return payload, Resolution.STANDARD

    async def _generate_primary(self, prompt: str, resolution: Resolution) -> str:
        parts = await self.client.generate_image(
            prompt=prompt,
            model=self.primary_model,
            aspect_ratio=self.aspect_ratio,
            image_size=Resolution(resolution).value,
        )
        return self._extract(parts, self.primary_model)

    async def _generate_secondary(self, prompt: str) -> str:
        parts = await self.client.generate_image(
            prompt=prompt,
            model=self.secondary_model,
            aspect_ratio=self.aspect_ratio,
        )
        return self._extract(parts, self.secondary_model)

    def _extract(self, parts: List[Dict[str, Any]], model_name: str) -> str:
        payload = find_inline_image(parts)
        if payload is None:
            raise NoImageDataError(
                f"No image data found in generation response from {model_name}."
            )

        logger.info(
            f"Image generated with {model_name}",
            extra={
                "model": model_name,
                "parts": len(parts),
                "payload_chars": len(payload),
            }
        )
        return payload

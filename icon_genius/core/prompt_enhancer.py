"""Prompt enhancement: turn a raw icon request into a detailed image prompt."""

from ..providers.gemini import GeminiClient
from ..models.schemas import EnhancementResult
from ..models.enums import Resolution
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Phrases that ask for the higher resolution tier
HIGH_FIDELITY_SIGNALS = ("high quality", "4k", "detailed", "large")

FALLBACK_STYLE_LABEL = "Standard"

ENHANCEMENT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "refinedPrompt": {
            "type": "STRING",
            "description": "The detailed prompt for the image generator",
        },
        "suggestedSize": {
            "type": "STRING",
            "enum": [r.value for r in Resolution],
            "description": "The suggested resolution size",
        },
        "styleDescription": {
            "type": "STRING",
            "description": "A short label for the style (e.g. '3D Neumorphism')",
        },
    },
    "required": ["refinedPrompt", "suggestedSize", "styleDescription"],
}


def build_enhancement_prompt(raw_text: str) -> str:
    """Instruction sent to the text model for one request."""
    signals = ", ".join(f'"{s}"' for s in HIGH_FIDELITY_SIGNALS)
    return f"""The user wants an icon generated.
User request: "{raw_text}".

Your task:
1. Act as an expert AI art director. Refine this request into a highly detailed, comma-separated image generation prompt suitable for an app icon or system icon. Focus on keywords like "vector", "minimalist", "3d render", "gradient", "centered", "white background" (or transparent if implied), "high fidelity".
2. Decide the best size. If the user asks for {signals}, choose "{Resolution.HIGH.value}". Otherwise, default to "{Resolution.STANDARD.value}".
3. Provide a short description of the style you chose.

Return ONLY JSON."""


def fallback_result(raw_text: str) -> EnhancementResult:
    """Deterministic result used whenever the text model cannot be used."""
    return EnhancementResult(
        refined_prompt=f"A high quality app icon, {raw_text}, vector style, white background",
        suggested_resolution=Resolution.STANDARD,
        style_label=FALLBACK_STYLE_LABEL,
    )


class PromptEnhancer:
    """Enhances user prompts for the image models.

    ``enhance`` never raises: any failure of the text model is logged and
    replaced by :func:`fallback_result`.
    """

    def __init__(self, gemini_client: GeminiClient, model_name: str):
        """
        Initialize prompt enhancer.

        Args:
            gemini_client: Gemini API client
            model_name: Fast text model used for enhancement
        """
        self.client = gemini_client
        self.model_name = model_name

    async def enhance(self, raw_text: str) -> EnhancementResult:
        """
        Enhance a raw icon request.

        Args:
            raw_text: User's original request

        Returns:
            EnhancementResult (the fallback result on any failure)
        """
        logger.info(
            f"Enhancing prompt with {self.model_name}",
            extra={"model": self.model_name, "original_prompt": raw_text[:200]}
        )

        try:
            response_text = await self.client.generate_structured(
                prompt=build_enhancement_prompt(raw_text),
                model=self.model_name,
                response_schema=ENHANCEMENT_SCHEMA,
            )
            result = EnhancementResult.model_validate_json(response_text)

        except Exception as e:
            logger.error(
                f"Enhancement failed, using fallback prompt: {e}",
                extra={
                    "model": self.model_name,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            return fallback_result(raw_text)

        logger.info(
            "Enhancement complete",
            extra={
                "model": self.model_name,
                "enhanced_prompt": result.refined_prompt[:500],
                "suggested_resolution": result.suggested_resolution.value,
                "style_label": result.style_label,
            }
        )

        return result

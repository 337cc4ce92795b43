"""Application wiring: build a ready-to-use studio session."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from .providers import GeminiClient, CredentialProvider, EnvCredentialProvider
from .core import PromptEnhancer, ImageSynthesizer, IconLibrary, IconStudio
from .models.schemas import StudioSettings
from .utils.config import Config, load_config
from .utils.storage import JsonLibraryStore
from .utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def build_studio(
    config: Optional[Config] = None,
    credentials: Optional[CredentialProvider] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncIterator[IconStudio]:
    """
    Create every component, yield a studio, and close the HTTP client on exit.

    Args:
        config: Loaded configuration (load_config() when omitted)
        credentials: Key source (environment when omitted)
        transport: Optional httpx transport for the Gemini client
    """
    logger.info("Studio starting up...")

    if config is None:
        config = load_config()
    if credentials is None:
        credentials = EnvCredentialProvider()

    gemini = GeminiClient(
        credentials=credentials,
        base_url=config.gemini.base_url,
        timeout=config.timeout_gemini_seconds,
        transport=transport,
    )
    await gemini.initialize()

    try:
        enhancer = PromptEnhancer(
            gemini_client=gemini,
            model_name=config.enhancement.model,
        )

        synthesizer = ImageSynthesizer(
            gemini_client=gemini,
            primary_model=config.synthesis.primary_model,
            secondary_model=config.synthesis.secondary_model,
            aspect_ratio=config.synthesis.aspect_ratio,
        )

        library = IconLibrary(JsonLibraryStore(config.library_path))
        library.load()

        studio = IconStudio(
            enhancer=enhancer,
            synthesizer=synthesizer,
            credentials=credentials,
            library=library,
            settings=StudioSettings(access_tier=config.default_access_tier),
        )
        await studio.check_key()

        logger.info(
            "Studio ready",
            extra={
                "has_key": studio.has_key,
                "library_size": len(library),
                "access_tier": studio.settings.access_tier.value,
            }
        )

        yield studio

    finally:
        await gemini.close()
        logger.info("Studio shut down")

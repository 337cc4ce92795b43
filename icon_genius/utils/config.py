"""Configuration management for the icon generator."""

import os
from pathlib import Path
from typing import Optional, Union
import yaml
from pydantic import BaseModel, ConfigDict, Field
from dotenv import load_dotenv

from ..models.enums import AccessTier
from .errors import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)

# Load environment variables
load_dotenv()

DEFAULT_CONFIG_PATH = Path("config/models.yaml")


class GeminiConfig(BaseModel):
    """Connection settings for the Gemini REST API."""
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"


class EnhancementConfig(BaseModel):
    """Configuration for prompt enhancement."""
    model: str = "gemini-3-flash-preview"


class SynthesisConfig(BaseModel):
    """Configuration for image synthesis."""
    primary_model: str = "gemini-3-pro-image-preview"
    secondary_model: str = "gemini-2.5-flash-image"
    aspect_ratio: str = "1:1"


class Config(BaseModel):
    """Main application configuration."""

    model_config = ConfigDict(populate_by_name=True)

    # Application Settings
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    default_access_tier: AccessTier = Field(default=AccessTier.PRO, alias="DEFAULT_ACCESS_TIER")
    library_path: Path = Field(default=Path("icon_library.json"), alias="LIBRARY_PATH")

    # Timeout Settings
    timeout_gemini_seconds: float = Field(default=120.0, alias="TIMEOUT_GEMINI_SECONDS")

    # Model Configuration
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    enhancement: EnhancementConfig = Field(default_factory=EnhancementConfig)
    synthesis: SynthesisConfig = Field(default_factory=SynthesisConfig)


# Global config instance
_config: Optional[Config] = None


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load configuration from environment and YAML files.

    Args:
        path: YAML file with model settings (defaults to config/models.yaml)

    Returns:
        Config instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config

    models_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not models_path.exists():
        raise ConfigurationError(f"models.yaml not found at {models_path}")

    try:
        with open(models_path, "r", encoding="utf-8") as f:
            models_config = yaml.safe_load(f) or {}

        if not isinstance(models_config, dict):
            raise ConfigurationError(f"{models_path} must contain a mapping")

        # Merge environment variables with YAML config
        config_data = {
            **os.environ,
            **models_config,
        }

        _config = Config(**config_data)

    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}") from e

    logger.info(
        "Configuration loaded successfully",
        extra={
            "environment": _config.app_env,
            "enhancement_model": _config.enhancement.model,
            "primary_model": _config.synthesis.primary_model,
            "secondary_model": _config.synthesis.secondary_model,
        }
    )

    return _config


def get_config() -> Config:
    """
    Get the current configuration instance.

    Raises:
        ConfigurationError: If config not loaded
    """
    if _config is None:
        raise ConfigurationError("Configuration not loaded. Call load_config() first.")
    return _config

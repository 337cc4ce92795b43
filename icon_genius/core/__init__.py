"""Core business logic components."""

from .prompt_enhancer import PromptEnhancer
from .image_synthesizer import ImageSynthesizer
from .classifier import classify_error, is_auth_failure
from .library import IconLibrary
from .studio import IconStudio, resolve_resolution

__all__ = [
    "PromptEnhancer",
    "ImageSynthesizer",
    "classify_error",
    "is_auth_failure",
    "IconLibrary",
    "IconStudio",
    "resolve_resolution",
]

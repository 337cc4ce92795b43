"""Pytest configuration and shared fixtures."""

import base64
import json
import re
from io import BytesIO
from typing import Any, Callable, Dict, List, Optional, Union

import pytest
from PIL import Image

from icon_genius.core import PromptEnhancer, ImageSynthesizer, IconLibrary, IconStudio
from icon_genius.core.prompt_enhancer import HIGH_FIDELITY_SIGNALS
from icon_genius.providers import StaticCredentialProvider

TEXT_MODEL = "text-model"
PRIMARY_MODEL = "primary-image-model"
SECONDARY_MODEL = "secondary-image-model"


def image_part(data: str, mime_type: str = "image/png") -> Dict[str, Any]:
    """A response part carrying inline image data."""
    return {"inlineData": {"mimeType": mime_type, "data": data}}


def text_part(text: str) -> Dict[str, Any]:
    return {"text": text}


def honour_instruction(prompt: str) -> str:
    """Answer an enhancement instruction the way a compliant model would."""
    match = re.search(r'^User request: "(.*?)"\.$', prompt, re.MULTILINE)
    raw_text = match.group(1) if match else prompt
    lowered = raw_text.lower()
    size = "2K" if any(signal in lowered for signal in HIGH_FIDELITY_SIGNALS) else "1K"
    return json.dumps({
        "refinedPrompt": f"{raw_text}, vector, minimalist, centered, white background",
        "suggestedSize": size,
        "styleDescription": "Flat Vector",
    })


class StubGeminiClient:
    """Stands in for GeminiClient and records every call.

    ``structured`` is a JSON string, an exception to raise, or a callable
    receiving the instruction. ``images`` maps model name to a parts list or
    an exception.
    """

    def __init__(
        self,
        structured: Union[str, Exception, Callable[[str], str], None] = None,
        images: Optional[Dict[str, Union[List[Dict[str, Any]], Exception]]] = None,
    ):
        self.structured = structured if structured is not None else honour_instruction
        self.images = images or {}
        self.structured_calls: List[Dict[str, Any]] = []
        self.image_calls: List[Dict[str, Any]] = []

    async def generate_structured(self, prompt, model, response_schema):
        self.structured_calls.append(
            {"prompt": prompt, "model": model, "response_schema": response_schema}
        )
        if isinstance(self.structured, Exception):
            raise self.structured
        if callable(self.structured):
            return self.structured(prompt)
        return self.structured

    async def generate_image(self, prompt, model, aspect_ratio="1:1", image_size=None):
        self.image_calls.append({
            "prompt": prompt,
            "model": model,
            "aspect_ratio": aspect_ratio,
            "image_size": image_size,
        })
        outcome = self.images.get(model, [])
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_enhancer(client: StubGeminiClient) -> PromptEnhancer:
    return PromptEnhancer(client, model_name=TEXT_MODEL)


def make_synthesizer(client: StubGeminiClient) -> ImageSynthesizer:
    return ImageSynthesizer(
        client,
        primary_model=PRIMARY_MODEL,
        secondary_model=SECONDARY_MODEL,
    )


def make_studio(
    client: StubGeminiClient,
    library: Optional[IconLibrary] = None,
    credentials: Optional[StaticCredentialProvider] = None,
) -> IconStudio:
    return IconStudio(
        enhancer=make_enhancer(client),
        synthesizer=make_synthesizer(client),
        credentials=credentials or StaticCredentialProvider("test-key"),
        library=library,
    )


def encoded_image(fmt: str = "PNG", size=(8, 8), color="red") -> str:
    """Base64 of a tiny real image."""
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return base64.b64encode(buffer.getvalue()).decode("utf-8")


@pytest.fixture
def stub_client():
    """Client whose text model honours the instruction and whose image models return nothing."""
    return StubGeminiClient()


@pytest.fixture
def png_payload():
    return encoded_image("PNG")


# Sample test data
@pytest.fixture
def sample_prompt():
    return "a lock icon"

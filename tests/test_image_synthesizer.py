"""Tests for image synthesis and the primary → secondary fallback."""

import httpx
import pytest

from icon_genius.core.image_synthesizer import find_inline_image
from icon_genius.models.enums import AccessTier, Resolution
from icon_genius.utils.errors import AuthenticationError, NoImageDataError, ProviderError

from conftest import (
    StubGeminiClient,
    image_part,
    text_part,
    make_synthesizer,
    PRIMARY_MODEL,
    SECONDARY_MODEL,
)


class TestFindInlineImage:
    """Scanning response parts for image data."""

    def test_returns_first_image_part(self):
        parts = [text_part("here you go"), image_part("FIRST"), image_part("SECOND")]
        assert find_inline_image(parts) == "FIRST"

    def test_skips_parts_with_empty_data(self):
        parts = [{"inlineData": {"mimeType": "image/png", "data": ""}}, image_part("REAL")]
        assert find_inline_image(parts) == "REAL"

    def test_none_without_image_parts(self):
        assert find_inline_image([text_part("sorry, no image")]) is None
        assert find_inline_image([]) is None


@pytest.mark.asyncio
async def test_primary_success_returns_primary_payload():
    client = StubGeminiClient(images={
        PRIMARY_MODEL: [text_part("ok"), image_part("PRIMARY")],
        SECONDARY_MODEL: [image_part("SECONDARY")],
    })

    payload = await make_synthesizer(client).synthesize("a lock", Resolution.HIGH)

    assert payload == "PRIMARY"
    assert len(client.image_calls) == 1
    call = client.image_calls[0]
    assert call["model"] == PRIMARY_MODEL
    assert call["aspect_ratio"] == "1:1"
    assert call["image_size"] == "2K"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "primary_outcome",
    [
        AuthenticationError("gemini", "Forbidden", 403),
        ProviderError("gemini", "RESOURCE_EXHAUSTED: quota", 429),
        httpx.ReadTimeout("timed out"),
        [text_part("I can only describe the icon")],
        [],
    ],
)
async def test_primary_failure_falls_back_without_resolution(primary_outcome):
    client = StubGeminiClient(images={
        PRIMARY_MODEL: primary_outcome,
        SECONDARY_MODEL: [image_part("SECONDARY")],
    })

    payload = await make_synthesizer(client).synthesize("a lock", Resolution.HIGH)

    assert payload == "SECONDARY"
    assert [c["model"] for c in client.image_calls] == [PRIMARY_MODEL, SECONDARY_MODEL]
    fallback_call = client.image_calls[1]
    assert fallback_call["image_size"] is None
    assert fallback_call["aspect_ratio"] == "1:1"
    assert fallback_call["prompt"] == "a lock"


@pytest.mark.asyncio
async def test_both_fail_raises_primary_error():
    primary_error = AuthenticationError("gemini", "Forbidden", 403)
    client = StubGeminiClient(images={
        PRIMARY_MODEL: primary_error,
        SECONDARY_MODEL: ProviderError("gemini", "Internal error", 500),
    })

    with pytest.raises(AuthenticationError) as exc_info:
        await make_synthesizer(client).synthesize("a lock", Resolution.STANDARD)

    assert exc_info.value is primary_error
    assert "Internal error" not in str(exc_info.value)
    assert len(client.image_calls) == 2


@pytest.mark.asyncio
async def test_primary_without_image_and_fallback_failure_raises_no_image_error():
    client = StubGeminiClient(images={
        PRIMARY_MODEL: [text_part("no image today")],
        SECONDARY_MODEL: RuntimeError("secondary exploded"),
    })

    with pytest.raises(NoImageDataError, match=PRIMARY_MODEL):
        await make_synthesizer(client).synthesize("a lock", Resolution.STANDARD)


@pytest.mark.asyncio
async def test_free_tier_uses_secondary_only():
    client = StubGeminiClient(images={
        PRIMARY_MODEL: [image_part("PRIMARY")],
        SECONDARY_MODEL: [image_part("SECONDARY")],
    })

    payload = await make_synthesizer(client).synthesize(
        "a lock", Resolution.HIGH, AccessTier.FREE
    )

    assert payload == "SECONDARY"
    assert len(client.image_calls) == 1
    assert client.image_calls[0]["model"] == SECONDARY_MODEL
    assert client.image_calls[0]["image_size"] is None


@pytest.mark.asyncio
async def test_free_tier_failure_is_not_retried():
    error = ProviderError("gemini", "Internal error", 500)
    client = StubGeminiClient(images={SECONDARY_MODEL: error})

    with pytest.raises(ProviderError) as exc_info:
        await make_synthesizer(client).synthesize(
            "a lock", Resolution.STANDARD, AccessTier.FREE
        )

    assert exc_info.value is error
    assert len(client.image_calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "images, access_tier, expected",
    [
        ({PRIMARY_MODEL: [image_part("P")]}, AccessTier.PRO, ("P", Resolution.HIGH)),
        (
            {PRIMARY_MODEL: [], SECONDARY_MODEL: [image_part("S")]},
            AccessTier.PRO,
            ("S", Resolution.STANDARD),
        ),
        ({SECONDARY_MODEL: [image_part("S")]}, AccessTier.FREE, ("S", Resolution.STANDARD)),
    ],
)
async def test_synthesize_with_resolution_reports_rendered_resolution(images, access_tier, expected):
    client = StubGeminiClient(images=images)

    result = await make_synthesizer(client).synthesize_with_resolution(
        "a lock", Resolution.HIGH, access_tier
    )

    assert result == expected

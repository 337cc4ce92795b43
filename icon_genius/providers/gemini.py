"""Gemini REST client for structured text and image generation."""

from typing import Any, Dict, List, Optional
import httpx

from .base import BaseProvider
from .credentials import CredentialProvider
from ..utils.logger import get_logger
from ..utils.errors import ProviderError, AuthenticationError, RateLimitError

logger = get_logger(__name__)

PROVIDER = "gemini"


class GeminiClient(BaseProvider):
    """Client for the Gemini generateContent endpoint."""

    def __init__(
        self,
        credentials: CredentialProvider,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            credentials=credentials,
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    def _get_default_headers(self) -> dict:
        return {"Content-Type": "application/json"}

    def _get_auth_headers(self) -> dict:
        return {"x-goog-api-key": self.credentials.get_api_key()}

    async def generate_structured(
        self,
        prompt: str,
        model: str,
        response_schema: Dict[str, Any],
    ) -> str:
        """
        Ask a text model for JSON matching a response schema.

        Args:
            prompt: Full instruction text
            model: Text model name
            response_schema: OpenAPI-style schema for the JSON answer

        Returns:
            The raw JSON text of the first candidate

        Raises:
            ProviderError: On HTTP errors or when no text came back
            httpx.RequestError: On transport failures
        """
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            },
        }

        data = await self._generate_content(model, payload)

        text = "".join(
            part.get("text", "")
            for part in self._first_candidate_parts(data)
            if isinstance(part, dict)
        )
        if not text.strip():
            raise ProviderError(PROVIDER, "No response text from prompt enhancement.")

        return text

    async def generate_image(
        self,
        prompt: str,
        model: str,
        aspect_ratio: str = "1:1",
        image_size: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Ask an image model to render a prompt.

        Args:
            prompt: Image prompt
            model: Image model name
            aspect_ratio: Requested aspect ratio
            image_size: Resolution ("1K", "2K"); omitted from the request when None

        Returns:
            Content parts of the first candidate (may be empty)
        """
        image_config: Dict[str, Any] = {"aspectRatio": aspect_ratio}
        if image_size is not None:
            image_config["imageSize"] = image_size

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseModalities": ["TEXT", "IMAGE"],
                "imageConfig": image_config,
            },
        }

        data = await self._generate_content(model, payload)
        return self._first_candidate_parts(data)

    async def _generate_content(self, model: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._ensure_client()

        url = f"{self.base_url}/models/{model}:generateContent"

        logger.info(
            f"Calling {model}",
            extra={"model": model, "url": url}
        )

        response = await self.client.post(
            url,
            json=payload,
            headers=self._get_auth_headers(),
        )

        self._handle_response_errors(response)

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(PROVIDER, f"Response was not JSON: {response.text[:200]}") from e

        if not isinstance(data, dict):
            raise ProviderError(PROVIDER, "Response was not a JSON object")

        return data

    @staticmethod
    def _first_candidate_parts(data: Dict[str, Any]) -> List[Dict[str, Any]]:
        candidates = data.get("candidates") or []
        if not candidates:
            return []
        content = candidates[0].get("content") or {}
        return content.get("parts") or []

    def _handle_response_errors(self, response: httpx.Response):
        """Handle HTTP response errors."""
        if response.status_code < 400:
            return

        try:
            error_data = response.json().get("error", {})
            error_message = error_data.get("message") or response.text
            error_status = error_data.get("status")
            if error_status:
                error_message = f"{error_status}: {error_message}"
        except (ValueError, AttributeError):
            error_message = response.text

        logger.error(
            "Gemini request failed",
            extra={
                "status": response.status_code,
                "error": error_message,
            }
        )

        if response.status_code in (401, 403):
            raise AuthenticationError(PROVIDER, error_message, response.status_code)
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                PROVIDER,
                int(retry_after) if retry_after and retry_after.isdigit() else None,
                message=error_message or "Rate limit exceeded",
            )

        raise ProviderError(PROVIDER, error_message, response.status_code)

"""HTTP client for the Gemini generateContent endpoint."""
import logging
from typing import Any, Dict, List, Sequence

import httpx

from grocery_compare.app.schemas import ImageInput
from grocery_compare.prompts.comparison_prompt import (
    COMPARISON_SYSTEM,
    COMPARISON_USER_TEMPLATE,
    RESPONSE_SCHEMA,
)

logger = logging.getLogger(__name__)


class GeminiAPIError(Exception):
    """Gemini answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Gemini API call failed with status: {status_code}")
        self.status_code = status_code
        self.body = body


class GeminiResponseError(Exception):
    """Gemini answered 2xx but the body is not the expected envelope."""


def build_image_parts(images: Sequence[ImageInput]) -> List[Dict[str, Any]]:
    return [{"inlineData": {"mimeType": img.mime_type, "data": img.data}} for img in images]


def build_comparison_payload(images: Sequence[ImageInput]) -> Dict[str, Any]:
    """
    Build the generateContent body for a price comparison.

    The user turn starts with the text instruction, followed by one inline
    image part per input image in the order given.
    """
    user_prompt = COMPARISON_USER_TEMPLATE.format(image_count=len(images))
    return {
        "systemInstruction": {"parts": [{"text": COMPARISON_SYSTEM}]},
        "contents": [
            {
                "role": "user",
                "parts": [{"text": user_prompt}, *build_image_parts(images)],
            }
        ],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


def extract_text(result: Any) -> str:
    """Return candidates[0].content.parts[0].text or raise GeminiResponseError."""
    try:
        text = result["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise GeminiResponseError("Invalid response structure from Gemini API.") from exc
    if not isinstance(text, str) or not text:
        raise GeminiResponseError("Invalid response structure from Gemini API.")
    return text


class GeminiClient:
    """Client for a single Gemini model."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate_content(self, payload: Dict[str, Any]) -> str:
        """
        POST payload to generateContent and return the first candidate's text.

        The key is sent as the `key` query parameter. A fresh AsyncClient is
        opened per call so nothing is shared between requests.

        Raises:
            GeminiAPIError: non-2xx status
            GeminiResponseError: 2xx body without the expected text part
            httpx.HTTPError: transport failures
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                self.endpoint,
                params={"key": self.api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
            )

        if not response.is_success:
            logger.error("Gemini API Error: status=%s body=%s", response.status_code, response.text)
            raise GeminiAPIError(response.status_code, response.text)

        try:
            result = response.json()
        except ValueError as exc:
            raise GeminiResponseError("Gemini API returned a non-JSON body.") from exc
        return extract_text(result)

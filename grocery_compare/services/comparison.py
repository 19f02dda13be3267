"""Price comparison pipeline: credential check, Gemini call, JSON decode."""
import json
import logging
from enum import Enum
from typing import Any, Optional, Sequence

import httpx
from pydantic import BaseModel, ConfigDict

from grocery_compare.app.schemas import ImageInput
from grocery_compare.app.settings import Settings
from grocery_compare.tools.gemini_client import (
    GeminiAPIError,
    GeminiClient,
    GeminiResponseError,
    build_comparison_payload,
)

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    METHOD_NOT_ALLOWED = "method_not_allowed"
    NO_IMAGES = "no_images"
    CONFIGURATION = "configuration"
    UPSTREAM = "upstream"
    DECODING = "decoding"


class ComparisonError(Exception):
    kind: ErrorKind = ErrorKind.UPSTREAM


class ConfigurationError(ComparisonError):
    kind = ErrorKind.CONFIGURATION


class UpstreamError(ComparisonError):
    kind = ErrorKind.UPSTREAM


class DecodingError(ComparisonError):
    kind = ErrorKind.DECODING


class ComparisonOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    result: Any = None
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, result: Any) -> "ComparisonOutcome":
        return cls(result=result)

    @classmethod
    def failure(cls, kind: ErrorKind) -> "ComparisonOutcome":
        return cls(error=kind)


class ComparisonService:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self.transport = transport

    def _client(self) -> GeminiClient:
        if not self.settings.gemini_api_key:
            raise ConfigurationError("API key is not configured.")
        return GeminiClient(
            api_key=self.settings.gemini_api_key,
            model=self.settings.gemini_model,
            base_url=self.settings.gemini_api_base,
            timeout=self.settings.request_timeout,
            transport=self.transport,
        )

    async def _call(self, images: Sequence[ImageInput]) -> Any:
        client = self._client()
        payload = build_comparison_payload(images)
        try:
            text = await client.generate_content(payload)
        except (GeminiAPIError, GeminiResponseError) as exc:
            raise UpstreamError(str(exc)) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Gemini request failed: {type(exc).__name__}: {exc}") from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise DecodingError(f"Model output is not valid JSON: {exc}") from exc

    async def compare(self, images: Sequence[ImageInput]) -> ComparisonOutcome:
        """Run one comparison. Never raises; failures come back as an ErrorKind."""
        try:
            result = await self._call(images)
        except ComparisonError as exc:
            logger.error("Comparison failed (%s): %s", exc.kind.value, exc)
            return ComparisonOutcome.failure(exc.kind)
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected error during comparison")
            return ComparisonOutcome.failure(ErrorKind.UPSTREAM)
        return ComparisonOutcome.success(result)

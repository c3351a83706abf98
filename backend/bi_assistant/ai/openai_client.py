"""Async wrapper around an OpenAI-compatible text and image endpoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Sequence

from openai import AsyncOpenAI, OpenAIError

from ..errors import ConfigurationError, ServiceError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "imagen-3.0-generate-002"

NOT_CONFIGURED_MESSAGE = "API key is not configured. Please set the API_KEY environment variable."

ASPECT_RATIO_SIZES = {
    "1:1": "1024x1024",
    "16:9": "1792x1024",
}

Contents = str | Sequence[Dict[str, Any]]


class OpenAIClient:
    """Single-provider client. Every call is one attempt; the SDK never retries."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        text_model: str | None = None,
        image_model: str | None = None,
    ):
        self.api_key = self._clean(api_key)
        self.base_url = self._clean(base_url) or DEFAULT_BASE_URL
        self.text_model = self._clean(text_model) or DEFAULT_TEXT_MODEL
        self.image_model = self._clean(image_model) or DEFAULT_IMAGE_MODEL

    @staticmethod
    def _clean(value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        return stripped or None

    @property
    def configured(self) -> bool:
        return self.api_key is not None

    def _require_configured(self) -> None:
        if not self.configured:
            raise ConfigurationError(NOT_CONFIGURED_MESSAGE)

    @asynccontextmanager
    async def _live_client(self) -> AsyncIterator[AsyncOpenAI]:
        """Open an SDK client for one call and close it afterwards.

        The HTTP connection pool is bound to the event loop that opened it, and
        callers may run each request on a new loop.
        """
        self._require_configured()
        async with AsyncOpenAI(api_key=self.api_key, base_url=self.base_url, max_retries=0) as client:
            yield client

    async def complete(
        self,
        contents: Contents,
        *,
        system_instruction: str,
        temperature: float | None = None,
        top_p: float | None = None,
        top_k: int | None = None,
        response_schema: Dict[str, Any] | None = None,
        schema_name: str = "response",
    ) -> str:
        """Return the model's text reply (possibly empty)."""
        self._require_configured()
        if isinstance(contents, str):
            user_content: Any = contents
        else:
            user_content = list(contents)

        kwargs: Dict[str, Any] = {}
        if temperature is not None:
            kwargs["temperature"] = temperature
        if top_p is not None:
            kwargs["top_p"] = top_p
        if top_k is not None:
            kwargs["extra_body"] = {"top_k": top_k}
        if response_schema is not None:
            kwargs["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": schema_name, "schema": response_schema},
            }

        try:
            async with self._live_client() as client:
                response = await client.chat.completions.create(
                    model=self.text_model,
                    messages=[
                        {"role": "system", "content": system_instruction},
                        {"role": "user", "content": user_content},
                    ],
                    **kwargs,
                )
        except OpenAIError as exc:
            logger.error("Error calling text model %s: %s", self.text_model, exc)
            raise ServiceError(f"AI service error: {exc}") from exc

        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        return choices[0].message.content or ""

    async def generate_images(
        self,
        prompt: str,
        *,
        number_of_images: int = 1,
        output_mime_type: str = "image/jpeg",
        aspect_ratio: str = "1:1",
    ) -> List[str]:
        """Return the generated images as base64 strings (possibly none)."""
        self._require_configured()
        try:
            size = ASPECT_RATIO_SIZES[aspect_ratio]
        except KeyError:
            raise ValueError(f"Unsupported aspect ratio: {aspect_ratio}") from None

        try:
            async with self._live_client() as client:
                response = await client.images.generate(
                    model=self.image_model,
                    prompt=prompt,
                    n=number_of_images,
                    size=size,
                    response_format="b64_json",
                    output_format=output_mime_type.split("/")[-1],
                )
        except OpenAIError as exc:
            logger.error("Error calling image model %s: %s", self.image_model, exc)
            raise ServiceError(f"Image service error: {exc}") from exc

        return [item.b64_json for item in (getattr(response, "data", None) or []) if item.b64_json]

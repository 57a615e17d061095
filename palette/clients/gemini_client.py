"""
Gemini client using the google-genai SDK.

This client talks to Google's Gemini endpoints through the SDK's async
surface (client.aio) so that several image requests can be in flight on one
event loop.

The client:
- Reads the API key (GEMINI_API_KEY, falling back to API_KEY) when constructed
- Requests JSON text constrained by a response schema from the text model
- Requests a portrait image from the image model and returns the first inline part
- Wraps SDK endpoint errors and per-call timeouts in GenerationError

Requires GEMINI_API_KEY in the .env file or the environment.
"""

import asyncio
import logging
from typing import Any, Awaitable, Dict, Optional, TypeVar

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from palette.config import GeminiConfig

from .base import BaseGenerationClient, InlineImage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GenerationError(RuntimeError):
    """Raised when a Gemini endpoint call fails or times out."""


def first_inline_image(response: Any) -> Optional[InlineImage]:
    """
    Scan a generate_content response for the first inline image part.

    Args:
        response: google.genai GenerateContentResponse (or any object of that shape)

    Returns:
        InlineImage for the first part carrying inline data, or None
    """
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline_data = getattr(part, "inline_data", None)
            if inline_data is not None and inline_data.data:
                return InlineImage(data=inline_data.data, mime_type=inline_data.mime_type)
    return None


class GeminiClient(BaseGenerationClient):
    """
    Client for the Gemini text and image models.

    One instance can serve a whole generation run: the text call and every
    image call of the fan-out share the same underlying SDK client.
    """
    provider = "gemini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        text_model: Optional[str] = None,
        image_model: Optional[str] = None,
        aspect_ratio: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Initialize the Gemini client.

        Args:
            api_key: API key (optional, reads from GEMINI_API_KEY / API_KEY if not provided)
            text_model: Recipe text model (optional, reads PALETTE_TEXT_MODEL)
            image_model: Image model (optional, reads PALETTE_IMAGE_MODEL)
            aspect_ratio: Image aspect ratio (optional, reads PALETTE_IMAGE_ASPECT_RATIO)
            timeout: Per-call timeout in seconds (optional, reads PALETTE_REQUEST_TIMEOUT)

        Raises:
            RuntimeError: If no API key is available or the SDK client cannot be created.
        """
        token = api_key or GeminiConfig.get_api_key()
        if not token:
            raise RuntimeError(
                "GEMINI_API_KEY is not set. Please add it to your .env file at the project root:\n"
                "GEMINI_API_KEY=your_gemini_api_key_here"
            )

        self.text_model = text_model or GeminiConfig.get_text_model()
        self.image_model = image_model or GeminiConfig.get_image_model()
        self.aspect_ratio = aspect_ratio or GeminiConfig.get_image_aspect_ratio()
        self.timeout = timeout if timeout is not None else GeminiConfig.get_request_timeout()

        try:
            self.client = genai.Client(api_key=token)
        except Exception as e:
            raise RuntimeError(f"Failed to initialize Gemini client: {e}") from e

        logger.debug(
            "Initialized GeminiClient text_model=%s image_model=%s aspect_ratio=%s timeout=%s",
            self.text_model, self.image_model, self.aspect_ratio, self.timeout,
        )

    async def _call(self, awaitable: Awaitable[T], model: str) -> T:
        """Await one endpoint call, applying the per-call timeout and wrapping SDK errors."""
        try:
            if self.timeout is None:
                return await awaitable
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise GenerationError(f"{model} did not respond within {self.timeout}s") from e
        except genai_errors.APIError as e:
            raise GenerationError(f"{model} request failed: {e}") from e

    async def generate_structured_text(self, prompt: str, schema: Dict[str, Any]) -> str:
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=schema,
        )
        logger.debug("Requesting structured text from %s (%d prompt chars)", self.text_model, len(prompt))
        response = await self._call(
            self.client.aio.models.generate_content(
                model=self.text_model,
                contents=prompt,
                config=config,
            ),
            self.text_model,
        )
        return response.text or ""

    async def generate_image(self, prompt: str) -> Optional[InlineImage]:
        config = types.GenerateContentConfig(
            image_config=types.ImageConfig(aspect_ratio=self.aspect_ratio),
        )
        logger.debug("Requesting image from %s aspect_ratio=%s", self.image_model, self.aspect_ratio)
        response = await self._call(
            self.client.aio.models.generate_content(
                model=self.image_model,
                contents=prompt,
                config=config,
            ),
            self.image_model,
        )
        return first_inline_image(response)

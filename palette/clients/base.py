"""
Base client abstract class for generative model integrations.

This module defines the interface the generation pipeline relies on, so the
orchestrator never touches a provider SDK directly. A client must:
- Identify its provider (e.g., "gemini")
- Produce structured JSON text for a prompt constrained by a response schema
- Produce at most one inline image for an image prompt
"""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

DEFAULT_IMAGE_MIME_TYPE = "image/png"


@dataclass(frozen=True)
class InlineImage:
    """An image payload returned inline by an image endpoint."""
    data: Union[bytes, str]
    mime_type: Optional[str] = None

    def to_data_uri(self) -> Optional[str]:
        """
        Encode the payload as a self-contained data URI.

        Bytes are base64-encoded; a str payload is assumed to be base64 already.

        Returns:
            "data:<mime>;base64,<payload>", or None when the payload is empty
        """
        if not self.data:
            return None
        if isinstance(self.data, bytes):
            encoded = base64.b64encode(self.data).decode("ascii")
        else:
            encoded = self.data.strip()
        if not encoded:
            return None
        mime = self.mime_type or DEFAULT_IMAGE_MIME_TYPE
        return f"data:{mime};base64,{encoded}"


class BaseGenerationClient(ABC):
    """
    Abstract base class for all generative model clients.

    Attributes:
        provider: String identifier for the provider (e.g., "gemini")
        text_model: Model used for structured recipe text
        image_model: Model used for dish photography
    """
    provider: str
    text_model: str
    image_model: str

    @abstractmethod
    async def generate_structured_text(self, prompt: str, schema: Dict[str, Any]) -> str:
        """
        Generate JSON text that conforms to the given response schema.

        Args:
            prompt: Natural-language instruction
            schema: Declared output schema

        Returns:
            The raw response text (may be empty). Parsing is the caller's job.

        Raises:
            Exception: Transport or endpoint failures propagate to the caller.
        """
        pass

    @abstractmethod
    async def generate_image(self, prompt: str) -> Optional[InlineImage]:
        """
        Generate an image for the given instruction.

        Returns:
            The first inline image in the response, or None if the response
            carries no image (which is a valid response, not an error).

        Raises:
            Exception: Transport or endpoint failures propagate to the caller.
        """
        pass

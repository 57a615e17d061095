"""Generative model clients used by the generation pipeline."""

from .base import BaseGenerationClient, InlineImage
from .gemini_client import GeminiClient, GenerationError

__all__ = [
    "BaseGenerationClient",
    "InlineImage",
    "GeminiClient",
    "GenerationError",
]

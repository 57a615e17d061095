"""
Configuration management for Chef's Palette.

This module centralizes environment variable loading from the .env file at the
project root. It is imported early by the Streamlit page (streamlit_app/app.py)
so that .env is loaded before any client reads the environment.

When no .env exists (e.g. on a hosting platform), load_dotenv() is a no-op and
the platform's environment variables are used instead.

Environment Variables:
- GEMINI_API_KEY: Required. API key for the Gemini endpoints (API_KEY is accepted as a fallback)
- PALETTE_TEXT_MODEL: Optional, defaults to "gemini-3-flash-preview"
- PALETTE_IMAGE_MODEL: Optional, defaults to "gemini-2.5-flash-image"
- PALETTE_IMAGE_ASPECT_RATIO: Optional, defaults to "3:4"
- PALETTE_REQUEST_TIMEOUT: Optional, per-call timeout in seconds (unset = no timeout)
- PALETTE_EVENT_LOG: Optional, path of the JSONL event log (defaults to "events.log")
- PALETTE_LOG_LEVEL: Optional, logging level name (defaults to "INFO")
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_TEXT_MODEL = "gemini-3-flash-preview"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_IMAGE_ASPECT_RATIO = "3:4"
DEFAULT_EVENT_LOG = "events.log"
DEFAULT_LOG_LEVEL = "INFO"

# Number of dishes requested per submission
RECIPES_PER_REQUEST = 3


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    Safe to call multiple times. Existing environment variables take precedence
    over values in the file (override=False).
    """
    # palette/config.py -> palette/ -> project root
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


# Load .env file on module import
load_env_file()


class GeminiConfig:
    """Configuration for the Gemini text and image endpoints."""

    @staticmethod
    def get_api_key() -> Optional[str]:
        """
        Get the Gemini API key from environment.

        Returns:
            API key string or None if neither GEMINI_API_KEY nor API_KEY is set

        Note:
            This does not raise an error - the client raises when it is constructed.
        """
        return os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")

    @staticmethod
    def get_text_model() -> str:
        return os.getenv("PALETTE_TEXT_MODEL", DEFAULT_TEXT_MODEL)

    @staticmethod
    def get_image_model() -> str:
        return os.getenv("PALETTE_IMAGE_MODEL", DEFAULT_IMAGE_MODEL)

    @staticmethod
    def get_image_aspect_ratio() -> str:
        return os.getenv("PALETTE_IMAGE_ASPECT_RATIO", DEFAULT_IMAGE_ASPECT_RATIO)

    @staticmethod
    def get_request_timeout() -> Optional[float]:
        """
        Get the per-call timeout in seconds.

        Returns:
            Positive float, or None when unset, empty, non-numeric or not positive
        """
        raw = os.getenv("PALETTE_REQUEST_TIMEOUT", "").strip()
        if not raw:
            return None
        try:
            timeout = float(raw)
        except ValueError:
            logger.warning("Ignoring invalid PALETTE_REQUEST_TIMEOUT=%r", raw)
            return None
        return timeout if timeout > 0 else None


class AppConfig:
    """Configuration for app-level concerns (logging, event log)."""

    @staticmethod
    def get_event_log_path() -> Path:
        return Path(os.getenv("PALETTE_EVENT_LOG", DEFAULT_EVENT_LOG))

    @staticmethod
    def get_log_level() -> int:
        """
        Resolve PALETTE_LOG_LEVEL to a logging level.

        Unknown names fall back to INFO.
        """
        name = os.getenv("PALETTE_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    """Configure root logging once for the app process."""
    logging.basicConfig(
        level=AppConfig.get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_required_env_vars() -> dict:
    """
    Get a dictionary of all required environment variables and their status.

    Returns:
        Dictionary with keys:
        - gemini_api_key: bool (True if set)
    """
    return {
        "gemini_api_key": GeminiConfig.get_api_key() is not None,
    }


def validate_required_config() -> None:
    """
    Validate that all required environment variables are set.

    Raises:
        RuntimeError: If any required configuration is missing
    """
    missing = []

    if not GeminiConfig.get_api_key():
        missing.append("GEMINI_API_KEY (required for recipe and image generation)")

    if missing:
        raise RuntimeError(
            "Missing required environment variables:\n"
            + "\n".join(f"  - {var}" for var in missing)
            + "\n\nPlease create a .env file at the project root with these variables."
        )

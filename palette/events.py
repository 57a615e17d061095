# palette/events.py
"""
Event logging for Chef's Palette.

Responsibilities:
- Provide a single log_event(...) function that appends a JSONL record to the
  event log (PALETTE_EVENT_LOG, default events.log).
  It never raises: event logging is strictly non-blocking.

- Provide small helper functions for the generation lifecycle:
  - log_generation_started(...)
  - log_recipes_generated(...)
  - log_images_hydrated(...)
  - log_generation_failed(...)

Payloads carry counts, meal times and model names only. Recipe content is never
written to disk.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional, Union

from palette.config import AppConfig

logger = logging.getLogger(__name__)

# None means "resolve from PALETTE_EVENT_LOG at write time". Tests patch this.
EVENT_LOG_FILE: Optional[Union[str, Path]] = None


def _event_log_path() -> Path:
    if EVENT_LOG_FILE is not None:
        return Path(EVENT_LOG_FILE)
    return AppConfig.get_event_log_path()


def _write_to_file(record: Dict[str, Any]) -> None:
    """
    Append a single JSON record to the event log as JSONL.
    Never raise exceptions.
    """
    path = _event_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
    except Exception as exc:
        # Last-resort: log at debug level, never raise.
        logger.debug("Failed to write event to %s: %s", path, exc)


def log_event(
    event: str,
    session_id: Optional[str],
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Core event logger.

    Builds a record with keys: ts (epoch seconds), event, session_id, payload,
    and appends it to the event log. Never raises.
    """
    record = {
        "ts": time.time(),
        "event": event,
        "session_id": session_id,
        "payload": payload or {},
    }
    _write_to_file(record)


# ---------------------------------------------------------------------------
# Helper functions for the generation lifecycle
# ---------------------------------------------------------------------------

def log_generation_started(
    session_id: Optional[str],
    meal_time: str,
    ingredient_count: int,
) -> None:
    """
    Log a generation_started event.

    payload:
    {
        "meal_time": "아침",
        "ingredient_count": 3
    }
    """
    log_event(
        "generation_started",
        session_id,
        {"meal_time": meal_time, "ingredient_count": ingredient_count},
    )


def log_recipes_generated(
    session_id: Optional[str],
    recipe_count: int,
    model: Optional[str] = None,
    duration_ms: Optional[int] = None,
) -> None:
    """
    Log a recipes_generated event (phase 1 finished).

    payload:
    {
        "recipe_count": 3,
        "model": "gemini-3-flash-preview",  # optional
        "duration_ms": 5230  # optional
    }
    """
    payload: Dict[str, Any] = {"recipe_count": recipe_count}
    if model is not None:
        payload["model"] = model
    if duration_ms is not None:
        payload["duration_ms"] = duration_ms
    log_event("recipes_generated", session_id, payload)


def log_images_hydrated(
    session_id: Optional[str],
    recipe_count: int,
    image_count: int,
    duration_ms: Optional[int] = None,
) -> None:
    """
    Log an images_hydrated event (phase 2 finished).

    payload:
    {
        "recipe_count": 3,
        "image_count": 2,
        "missing_count": 1,
        "duration_ms": 9100  # optional
    }
    """
    payload: Dict[str, Any] = {
        "recipe_count": recipe_count,
        "image_count": image_count,
        "missing_count": recipe_count - image_count,
    }
    if duration_ms is not None:
        payload["duration_ms"] = duration_ms
    log_event("images_hydrated", session_id, payload)


def log_generation_failed(
    session_id: Optional[str],
    error: BaseException,
) -> None:
    """
    Log a generation_failed event.

    payload:
    {
        "error_type": "GenerationError",
        "message": "..."  # truncated to 200 characters
    }
    """
    log_event(
        "generation_failed",
        session_id,
        {"error_type": type(error).__name__, "message": str(error)[:200]},
    )

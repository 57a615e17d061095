"""
Shared fixtures for the Chef's Palette test suite.

FakeGenerationClient stands in for the Gemini client so that no test touches the
network. Text responses and per-title image outcomes are configured per test.
"""

import copy
import json
from typing import Any, Dict, List, Optional

import pytest

from palette.clients.base import BaseGenerationClient, InlineImage

SAMPLE_RECIPES: List[Dict[str, Any]] = [
    {
        "title": "훈제 베이컨 수플레 오믈렛",
        "description": "구름처럼 부풀린 달걀 위에 바삭한 베이컨을 올린 아침 요리.",
        "ingredients": ["계란 3개", "우유 50ml", "베이컨 2줄"],
        "instructions": ["베이컨을 굽는다.", "계란과 우유를 거품 낸다.", "팬에 부어 익힌다."],
    },
    {
        "title": "밀크 브리오슈 프렌치 토스트",
        "description": "우유와 달걀에 적신 빵을 버터에 구워낸 디저트 같은 한 접시.",
        "ingredients": ["계란 2개", "우유 100ml", "베이컨 1줄"],
        "instructions": ["계란과 우유를 섞는다.", "빵을 적신다.", "버터에 굽는다."],
    },
    {
        "title": "베이컨 크림 에그 코코트",
        "description": "크림과 달걀을 오븐에 부드럽게 익힌 프렌치 스타일 요리.",
        "ingredients": ["계란 2개", "우유 80ml", "베이컨 2줄"],
        "instructions": ["베이컨을 잘게 썬다.", "코코트에 재료를 담는다.", "오븐에서 12분 굽는다."],
    },
]

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


class FakeGenerationClient(BaseGenerationClient):
    """
    In-memory client.

    Args:
        text: Text returned by generate_structured_text
        text_error: Exception raised by generate_structured_text instead
        image_errors: Titles whose image call raises
        missing_images: Titles whose image call returns no image
    """
    provider = "fake"
    text_model = "fake-text"
    image_model = "fake-image"

    def __init__(
        self,
        text: Optional[str] = None,
        text_error: Optional[Exception] = None,
        image_errors: Optional[set] = None,
        missing_images: Optional[set] = None,
    ) -> None:
        self.text = json.dumps({"recipes": SAMPLE_RECIPES}, ensure_ascii=False) if text is None else text
        self.text_error = text_error
        self.image_errors = image_errors or set()
        self.missing_images = missing_images or set()
        self.text_prompts: List[str] = []
        self.schemas: List[Dict[str, Any]] = []
        self.image_prompts: List[str] = []

    async def generate_structured_text(self, prompt: str, schema: Dict[str, Any]) -> str:
        self.text_prompts.append(prompt)
        self.schemas.append(schema)
        if self.text_error is not None:
            raise self.text_error
        return self.text

    async def generate_image(self, prompt: str) -> Optional[InlineImage]:
        self.image_prompts.append(prompt)
        for title in self.image_errors:
            if f"'{title}'" in prompt:
                raise RuntimeError(f"image endpoint unavailable for {title}")
        for title in self.missing_images:
            if f"'{title}'" in prompt:
                return None
        return InlineImage(data=PNG_BYTES, mime_type="image/png")


@pytest.fixture
def sample_recipes() -> List[Dict[str, Any]]:
    """Three well-formed recipe records as the model would return them."""
    return copy.deepcopy(SAMPLE_RECIPES)


@pytest.fixture
def fake_client():
    """Factory for FakeGenerationClient instances."""
    def _make(**kwargs: Any) -> FakeGenerationClient:
        return FakeGenerationClient(**kwargs)
    return _make


@pytest.fixture(autouse=True)
def isolated_event_log(tmp_path, monkeypatch):
    """Send event-log writes to a temporary file for every test."""
    log_file = tmp_path / "events.log"
    monkeypatch.setattr("palette.events.EVENT_LOG_FILE", log_file)
    return log_file

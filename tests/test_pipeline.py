"""
End-to-end tests for generate_palette against a fake client and a dict-backed
state holder.

Scenarios:
- Happy path: egg, milk, bacon at breakfast gives three recipes, each with an image
- Text failure: the error propagates, nothing is shown and loading ends
- One image fails: the run completes and only that recipe lacks an image
- Interrupted run: a rerun stops the image phase, which is resumed on the next run
"""

import json

import pytest

from palette.clients.gemini_client import GenerationError
from palette.generation import (
    STATUS_PLATING_IMAGES,
    STATUS_WRITING_RECIPES,
    RecipePayloadError,
    generate_palette,
    resume_hydration,
)
from palette.models import GenerationRequest, MealTime, PipelineStage
from streamlit_app.utils.state import PaletteState


class Recorder:
    """on_change callback that snapshots the holder at every lifecycle event."""

    def __init__(self):
        self.snapshots = []

    def __call__(self, state: PaletteState) -> None:
        self.snapshots.append(
            {
                "loading": state.loading,
                "status": state.status,
                "stage": state.stage,
                "recipes": state.recipes,
            }
        )


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def state(recorder):
    return PaletteState({}, on_change=recorder)


def _read_events(log_file):
    return [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]


class TestHappyPath:
    """Breakfast with egg, milk and bacon."""

    @pytest.mark.asyncio
    async def test_three_recipes_with_images(self, state, fake_client, sample_recipes):
        """Test that three recipes are shown in order, each with an image, and loading ends."""
        request = GenerationRequest(ingredients_text="egg, milk, bacon", meal_time=MealTime.BREAKFAST)
        client = fake_client()

        result = await generate_palette(request, state, client=client)

        assert [r.title for r in result] == [r["title"] for r in sample_recipes]
        assert all(r.image_url and r.image_url.startswith("data:image/png;base64,") for r in result)
        assert state.recipes == tuple(result)
        assert state.loading is False
        assert state.status == ""
        assert state.stage == PipelineStage.COMPLETE
        assert "아침" in client.text_prompts[0]
        assert len(client.image_prompts) == 3

    @pytest.mark.asyncio
    async def test_lifecycle_events_in_order(self, state, recorder, fake_client):
        """Test that the holder sees begin, text-only publish, then hydrated completion."""
        request = GenerationRequest(ingredients_text="egg, milk, bacon")
        await generate_palette(request, state, client=fake_client())

        begin, published, completed = recorder.snapshots
        assert begin["loading"] is True
        assert begin["status"] == STATUS_WRITING_RECIPES
        assert begin["recipes"] == ()

        assert published["loading"] is True
        assert published["status"] == STATUS_PLATING_IMAGES
        assert published["stage"] == PipelineStage.GENERATING_IMAGES
        assert len(published["recipes"]) == 3
        assert all(r.image_url is None for r in published["recipes"])

        assert completed["loading"] is False
        assert all(r.has_image for r in completed["recipes"])
        assert [r.id for r in completed["recipes"]] == [r.id for r in published["recipes"]]

    @pytest.mark.asyncio
    async def test_previous_results_cleared_on_new_run(self, state, recorder, fake_client):
        """Test that a new submission empties the list before new recipes arrive."""
        await generate_palette(GenerationRequest(ingredients_text="egg"), state, client=fake_client())
        recorder.snapshots.clear()

        await generate_palette(GenerationRequest(ingredients_text="tofu"), state, client=fake_client())
        assert recorder.snapshots[0]["recipes"] == ()

    @pytest.mark.asyncio
    async def test_events_logged(self, state, fake_client, isolated_event_log):
        """Test that the run writes started, generated and hydrated events."""
        request = GenerationRequest(ingredients_text="egg, milk, bacon")
        await generate_palette(request, state, client=fake_client(), session_id="s-1")

        events = _read_events(isolated_event_log)
        assert [e["event"] for e in events] == [
            "generation_started",
            "recipes_generated",
            "images_hydrated",
        ]
        assert all(e["session_id"] == "s-1" for e in events)
        assert events[0]["payload"]["ingredient_count"] == 3
        assert events[2]["payload"]["image_count"] == 3


class TestTextFailure:
    """The text endpoint is unavailable."""

    @pytest.mark.asyncio
    async def test_error_propagates_and_nothing_shown(self, state, fake_client):
        """Test that the failure is raised and the holder ends empty and not loading."""
        client = fake_client(text_error=GenerationError("text model unavailable"))
        request = GenerationRequest(ingredients_text="egg", meal_time=MealTime.LUNCH)

        with pytest.raises(GenerationError):
            await generate_palette(request, state, client=client)

        assert state.recipes == ()
        assert state.loading is False
        assert state.stage == PipelineStage.FAILED
        assert client.image_prompts == []

    @pytest.mark.asyncio
    async def test_unparseable_text_is_fatal(self, state, fake_client):
        """Test that non-JSON text fails the run the same way."""
        client = fake_client(text="I am not JSON")
        with pytest.raises(RecipePayloadError):
            await generate_palette(GenerationRequest(ingredients_text="egg"), state, client=client)

        assert state.recipes == ()
        assert state.loading is False

    @pytest.mark.asyncio
    async def test_failure_event_logged(self, state, fake_client, isolated_event_log):
        """Test that a failed run records the error type."""
        client = fake_client(text_error=GenerationError("boom"))
        with pytest.raises(GenerationError):
            await generate_palette(GenerationRequest(ingredients_text="egg"), state, client=client)

        events = _read_events(isolated_event_log)
        assert events[-1]["event"] == "generation_failed"
        assert events[-1]["payload"]["error_type"] == "GenerationError"

    @pytest.mark.asyncio
    async def test_missing_key(self, state, monkeypatch):
        """Test that a missing credential fails the run through the same path."""
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("API_KEY", raising=False)

        with pytest.raises(RuntimeError, match="GEMINI_API_KEY"):
            await generate_palette(GenerationRequest(ingredients_text="egg"), state)

        assert state.loading is False
        assert state.stage == PipelineStage.FAILED


class TestPartialImageFailure:
    """The image call for the second recipe fails."""

    @pytest.mark.asyncio
    async def test_only_failed_recipe_lacks_image(self, state, fake_client, sample_recipes):
        """Test that recipes 1 and 3 have images, 2 does not, and no error is raised."""
        client = fake_client(image_errors={sample_recipes[1]["title"]})
        result = await generate_palette(GenerationRequest(ingredients_text="egg"), state, client=client)

        assert len(result) == 3
        assert result[0].has_image
        assert result[1].image_url is None
        assert result[2].has_image
        assert state.loading is False
        assert state.stage == PipelineStage.COMPLETE

    @pytest.mark.asyncio
    async def test_zero_recipes_completes_quietly(self, state, fake_client):
        """Test that an empty batch completes without images or errors."""
        client = fake_client(text='{"recipes": []}')
        result = await generate_palette(GenerationRequest(ingredients_text="egg"), state, client=client)

        assert result == []
        assert state.recipes == ()
        assert state.loading is False
        assert client.image_prompts == []


class ScriptStopped(Exception):
    """Stands in for the exception Streamlit raises to stop a script run on rerun."""


def _stop_when_images_start(state: PaletteState) -> None:
    if state.stage == PipelineStage.GENERATING_IMAGES:
        raise ScriptStopped()


class TestInterruptedRun:
    """A rerun (e.g. the theme toggle) stops the run after the recipes are shown."""

    async def _interrupted(self, store, client):
        state = PaletteState(store, on_change=_stop_when_images_start)
        with pytest.raises(ScriptStopped):
            await generate_palette(GenerationRequest(ingredients_text="egg"), state, client=client)
        assert client.image_prompts == []
        # The next script run builds a fresh holder over the same session store
        return PaletteState(store)

    @pytest.mark.asyncio
    async def test_recovery_does_not_report_completion(self, fake_client):
        """Test that text-only recipes are left pending, not marked complete."""
        state = await self._interrupted({}, fake_client())

        assert state.recover_interrupted_run() is True
        assert state.stage == PipelineStage.GENERATING_IMAGES
        assert state.loading is False
        assert state.images_pending is True
        assert all(r.image_url is None for r in state.recipes)

    @pytest.mark.asyncio
    async def test_resume_hydrates_pending_recipes(self, fake_client, recorder):
        """Test that the image phase is finished on the next run, keeping ids and order."""
        store = {}
        state = await self._interrupted(store, fake_client())
        state.recover_interrupted_run()
        state.toggle_theme()
        pending_ids = [r.id for r in state.recipes]

        client = fake_client()
        state.on_change = recorder
        result = await resume_hydration(state, client=client)

        assert [r.id for r in result] == pending_ids
        assert all(r.has_image for r in state.recipes)
        assert len(client.image_prompts) == 3
        assert state.stage == PipelineStage.COMPLETE
        assert state.loading is False
        assert state.dark_mode is True
        assert [s["loading"] for s in recorder.snapshots] == [True, False]
        assert recorder.snapshots[0]["status"] == STATUS_PLATING_IMAGES

    @pytest.mark.asyncio
    async def test_resume_isolates_image_failures(self, fake_client, sample_recipes):
        """Test that a failing image during resumption only affects its own recipe."""
        state = await self._interrupted({}, fake_client())
        state.recover_interrupted_run()

        client = fake_client(image_errors={sample_recipes[0]["title"]})
        result = await resume_hydration(state, client=client)

        assert result[0].image_url is None
        assert result[1].has_image and result[2].has_image
        assert state.stage == PipelineStage.COMPLETE

    @pytest.mark.asyncio
    async def test_resume_without_key_completes_without_images(self, fake_client, monkeypatch):
        """Test that a missing key during resumption still ends loading."""
        state = await self._interrupted({}, fake_client())
        state.recover_interrupted_run()
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("API_KEY", raising=False)

        result = await resume_hydration(state)

        assert len(result) == 3
        assert all(r.image_url is None for r in result)
        assert state.loading is False
        assert state.stage == PipelineStage.COMPLETE

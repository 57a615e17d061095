"""
Recipe generation pipeline.

This module is the orchestrator between the Streamlit page and the model
client. It:
- Requests three text recipes for the user's ingredients and meal time
- Parses the structured payload into validated Recipe records with unique ids
- Requests one image per recipe, all concurrently, isolating each failure
- Merges images back into the recipe list in the original order
- Reports every lifecycle step to a state sink (the presentation state holder)

Pipeline flow: app.py -> generate_palette() -> request_recipes() -> publish text-only
recipes -> hydrate_images() -> request_recipe_image() x N -> publish hydrated recipes

A run stopped by a Streamlit rerun after its recipes were published is finished by
resume_hydration() on the next script run.

Failure policy:
- Text call failures (transport, endpoint, missing key, unparseable text) are fatal
  and propagate to the caller after the state sink has been told.
- Malformed-but-parseable payloads yield zero recipes.
- Image failures yield a recipe without an image; they never abort the run.
"""

import asyncio
import json
import logging
import re
import time
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from palette.clients.base import BaseGenerationClient
from palette.clients.gemini_client import GeminiClient
from palette.events import (
    log_generation_failed,
    log_generation_started,
    log_images_hydrated,
    log_recipes_generated,
)
from palette.models import GenerationRequest, MealTime, Recipe, RecipeBatch, RecipeDraft
from palette.prompts import RECIPE_RESPONSE_SCHEMA, build_image_prompt, build_recipe_prompt

logger = logging.getLogger(__name__)

# Status strings shown in the loading overlay (fixed UI language)
STATUS_WRITING_RECIPES = "쉐프가 영감을 기록하고 있습니다..."
STATUS_PLATING_IMAGES = "미적 구성을 시각화하는 중입니다..."
FAILURE_NOTICE = "오류가 발생했습니다."

# Substituted when the endpoint returns no text at all
EMPTY_PAYLOAD = '{"recipes": []}'

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


class RecipePayloadError(ValueError):
    """Raised when the text endpoint returns something that is not JSON at all."""


def _strip_code_fence(text: str) -> str:
    """Unwrap a ```json ... ``` fence if the model added one."""
    stripped = text.strip()
    match = _CODE_FENCE.match(stripped)
    return match.group(1) if match else stripped


def parse_recipe_payload(text: Optional[str]) -> List[RecipeDraft]:
    """
    Parse the structured text returned by the recipe endpoint.

    Args:
        text: Raw response text (may be None or empty)

    Returns:
        List of validated RecipeDraft objects. Empty when the text is empty, the
        "recipes" array is absent, or any record fails validation. A batch is
        accepted whole or not at all.

    Raises:
        RecipePayloadError: If the text is not parseable JSON.

    Examples:
        >>> parse_recipe_payload("")
        []
        >>> parse_recipe_payload('{"recipes": "nope"}')
        []
    """
    raw = _strip_code_fence(text or "") or EMPTY_PAYLOAD
    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as e:
        raise RecipePayloadError(f"Recipe payload is not valid JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("recipes"), list):
        logger.warning("Recipe payload has no 'recipes' array; treating as zero recipes")
        return []

    try:
        batch = RecipeBatch.model_validate(data)
    except ValidationError as e:
        logger.warning(
            "Recipe payload failed validation (%d errors); treating as zero recipes: %s",
            e.error_count(), e,
        )
        return []

    return batch.recipes


def assign_ids(drafts: Sequence[RecipeDraft], now_ms: Optional[int] = None) -> List[Recipe]:
    """
    Turn drafts into Recipes with ids of the form "recipe-<epoch millis>-<index>".

    The index makes ids pairwise distinct within one batch; the timestamp keeps
    them distinct across batches.
    """
    stamp = int(time.time() * 1000) if now_ms is None else now_ms
    return [
        Recipe.from_draft(draft, f"recipe-{stamp}-{index}")
        for index, draft in enumerate(drafts)
    ]


async def request_recipes(
    ingredients_text: str,
    meal_time: MealTime,
    client: Optional[BaseGenerationClient] = None,
) -> List[Recipe]:
    """
    Request three recipes for the given ingredients and meal time.

    The ingredient text is not validated here; the caller checks that it is
    non-empty after trimming.

    Args:
        ingredients_text: Raw comma-delimited ingredient text
        meal_time: Selected meal time
        client: Model client (optional, a GeminiClient is created if not provided)

    Returns:
        Fully populated Recipe objects without images (possibly empty)

    Raises:
        RuntimeError: If the client cannot be created (e.g. missing API key)
        GenerationError: If the endpoint call fails
        RecipePayloadError: If the response text is not JSON
    """
    if client is None:
        client = GeminiClient()

    prompt = build_recipe_prompt(ingredients_text, meal_time)
    logger.info("Requesting recipes: meal_time=%s ingredients=%r model=%s",
                MealTime(meal_time).value, ingredients_text, client.text_model)

    text = await client.generate_structured_text(prompt, RECIPE_RESPONSE_SCHEMA)
    drafts = parse_recipe_payload(text)
    recipes = assign_ids(drafts)

    logger.info("Recipe endpoint returned %d recipes", len(recipes))
    return recipes


async def request_recipe_image(
    title: str,
    client: Optional[BaseGenerationClient] = None,
) -> Optional[str]:
    """
    Request a food photograph for one dish.

    Args:
        title: Recipe title
        client: Model client (optional, a GeminiClient is created if not provided)

    Returns:
        A "data:<mime>;base64,<payload>" reference, or None if the response carried
        no image or the call failed for any reason. Failures are logged, never raised.
    """
    try:
        if client is None:
            client = GeminiClient()
        image = await client.generate_image(build_image_prompt(title))
    except Exception as e:
        logger.error("Image generation failed for %r: %s", title, e, exc_info=True)
        return None

    if image is None:
        logger.warning("Image endpoint returned no inline image for %r", title)
        return None

    data_uri = image.to_data_uri()
    if data_uri is None:
        logger.warning("Image endpoint returned an empty image payload for %r", title)
    return data_uri


async def hydrate_images(
    recipes: Sequence[Recipe],
    client: Optional[BaseGenerationClient] = None,
) -> List[Recipe]:
    """
    Attach an image to every recipe, requesting all images concurrently.

    Every request is started before any is awaited. A failing request only
    leaves its own recipe without an image; siblings are never cancelled.

    Returns:
        New Recipe list in the same order as the input
    """
    if not recipes:
        return []

    logger.info("Requesting %d images concurrently", len(recipes))
    results = await asyncio.gather(
        *(request_recipe_image(recipe.title, client=client) for recipe in recipes),
        return_exceptions=True,
    )

    hydrated: List[Recipe] = []
    for recipe, result in zip(recipes, results):
        if isinstance(result, BaseException):
            # request_recipe_image already swallows Exception; this covers cancellation
            logger.error("Image task for %r ended with %s", recipe.title, type(result).__name__)
            result = None
        hydrated.append(recipe.with_image(result))

    logger.info("Image hydration finished: %d/%d recipes have images",
                sum(1 for r in hydrated if r.has_image), len(hydrated))
    return hydrated


async def generate_palette(
    request: GenerationRequest,
    state: Any,
    client: Optional[BaseGenerationClient] = None,
    session_id: Optional[str] = None,
) -> List[Recipe]:
    """
    Run the full two-phase pipeline for one submission.

    The state sink receives, in order:
    - begin_generation(status)                 loading on, list cleared
    - publish_recipes(recipes, status)         text-only recipes, images pending
    - complete_generation(recipes)             hydrated recipes, loading off
    or, when the text phase fails:
    - fail_generation()                        list empty, loading off

    Args:
        request: The user's submission
        state: Presentation state holder (see streamlit_app.utils.state.PaletteState)
        client: Model client shared by every call of this run (optional)
        session_id: Session identifier for the event log (optional)

    Returns:
        The hydrated recipe list

    Raises:
        Exception: Whatever made the text phase fail, after fail_generation() was called.
    """
    meal_time = MealTime(request.meal_time)
    state.begin_generation(STATUS_WRITING_RECIPES)
    log_generation_started(session_id, meal_time.value, len(request.ingredient_list()))

    started = time.monotonic()
    try:
        if client is None:
            client = GeminiClient()
        recipes = await request_recipes(request.ingredients_text, meal_time, client=client)
    except Exception as e:
        logger.error("Recipe generation failed: %s", e, exc_info=True)
        log_generation_failed(session_id, e)
        state.fail_generation()
        raise

    log_recipes_generated(
        session_id,
        len(recipes),
        model=client.text_model,
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    state.publish_recipes(recipes, STATUS_PLATING_IMAGES)

    images_started = time.monotonic()
    hydrated = await hydrate_images(recipes, client=client)
    log_images_hydrated(
        session_id,
        len(hydrated),
        sum(1 for r in hydrated if r.has_image),
        duration_ms=int((time.monotonic() - images_started) * 1000),
    )

    state.complete_generation(hydrated)
    return hydrated


async def resume_hydration(
    state: Any,
    client: Optional[BaseGenerationClient] = None,
    session_id: Optional[str] = None,
) -> List[Recipe]:
    """
    Finish the image phase of a run that was stopped after its recipes were shown.

    The state sink receives resume_images(status) then complete_generation(recipes).
    Like the image phase of generate_palette this never raises: a client that
    cannot be created leaves every recipe without an image.

    Returns:
        The hydrated recipe list
    """
    recipes = list(state.recipes)
    state.resume_images(STATUS_PLATING_IMAGES)
    logger.info("Resuming image phase for %d recipes (session=%s)", len(recipes), session_id)

    if client is None:
        try:
            client = GeminiClient()
        except RuntimeError as e:
            logger.error("Cannot resume image phase: %s", e)

    started = time.monotonic()
    hydrated = await hydrate_images(recipes, client=client)
    log_images_hydrated(
        session_id,
        len(hydrated),
        sum(1 for r in hydrated if r.has_image),
        duration_ms=int((time.monotonic() - started) * 1000),
    )

    state.complete_generation(hydrated)
    return hydrated

"""
Recipe and request models for Chef's Palette.

This module defines the schemas that flow through the generation pipeline:
- RecipeDraft / RecipeBatch: the text-only shape the model is asked to return
- Recipe: a draft with an assigned id and an optional image reference
- GenerationRequest: the raw user input for one submission
- MealTime / PipelineStage: small enums shared by the pipeline and the UI

Recipe is frozen. Attaching an image returns a new record (with_image), so the
state holder always receives whole replacement values.
"""

from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MealTime(str, Enum):
    """The three dayparts a user can pick. Values are the fixed UI labels."""

    BREAKFAST = "아침"
    LUNCH = "점심"
    DINNER = "저녁"

    @classmethod
    def default(cls) -> "MealTime":
        return cls.BREAKFAST

    @classmethod
    def from_label(cls, label: str) -> "MealTime":
        """
        Resolve a UI label (or enum name) to a MealTime.

        Raises:
            ValueError: If the label matches no meal time
        """
        label = (label or "").strip()
        for member in cls:
            if label == member.value or label.upper() == member.name:
                return member
        raise ValueError(f"Unknown meal time: {label!r}")


class PipelineStage(str, Enum):
    """Lifecycle of one generation run as seen by the presentation layer."""

    IDLE = "idle"
    GENERATING_TEXT = "generating_text"
    GENERATING_IMAGES = "generating_images"
    COMPLETE = "complete"
    FAILED = "failed"


# A list entry that is still non-empty after whitespace stripping
NonBlankStr = Annotated[str, Field(min_length=1)]


class RecipeDraft(BaseModel):
    """
    One recipe exactly as the model returns it (no id, no image).

    Every field is required and must be non-empty so that a draft can never
    be exposed half-filled.
    """
    title: str = Field(..., min_length=1, description="Dish title")
    description: str = Field(..., min_length=1, description="Elegant dish summary")
    ingredients: List[NonBlankStr] = Field(..., min_length=1, description="Required ingredients")
    instructions: List[NonBlankStr] = Field(..., min_length=1, description="Step-by-step methodology")

    model_config = ConfigDict(str_strip_whitespace=True)


class RecipeBatch(BaseModel):
    """Top-level structured response: {"recipes": [...]}."""
    recipes: List[RecipeDraft] = Field(..., description="Suggested dishes")


class Recipe(RecipeDraft):
    """
    A generated recipe presented to the user.

    Created by the orchestrator once text generation succeeds. The image
    reference is a self-contained data URI, or None while (or if) no image
    is available.
    """
    id: str = Field(..., min_length=1, description="Identifier unique within a generation batch")
    image_url: Optional[str] = Field(None, description="data:<mime>;base64,<payload> image reference")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_draft(cls, draft: RecipeDraft, recipe_id: str) -> "Recipe":
        return cls(id=recipe_id, **draft.model_dump())

    def with_image(self, image_url: Optional[str]) -> "Recipe":
        """Return a copy of this recipe carrying the given image reference."""
        return self.model_copy(update={"image_url": image_url})

    @property
    def has_image(self) -> bool:
        return bool(self.image_url)


class GenerationRequest(BaseModel):
    """Raw user input for a single submission."""
    ingredients_text: str = Field(..., description="Comma-delimited ingredient text, untyped")
    meal_time: MealTime = Field(default_factory=MealTime.default)

    def is_blank(self) -> bool:
        """True when the ingredient text is empty after trimming whitespace."""
        return not self.ingredients_text.strip()

    def ingredient_list(self) -> List[str]:
        """Split the raw text on commas, dropping empty entries."""
        return [part.strip() for part in self.ingredients_text.split(",") if part.strip()]

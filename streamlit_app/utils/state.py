"""
Palette State Management Module.

This module wraps Streamlit's session_state to provide a clean API for the
presentation state of the recipe page:

- `recipes`: tuple of Recipe objects currently shown (replaced wholesale)
- `loading`: True from submission start until the pipeline completes or fails
- `status`: human-readable phase description for the loading overlay
- `stage`: PipelineStage of the current/last run
- `dark_mode`: theme preference, toggled directly by the user
- `meal_time` / `ingredients`: the current form values

The holder performs no validation or business logic. It is a sink for the
generation pipeline's lifecycle events (begin_generation, publish_recipes,
resume_images, complete_generation, fail_generation) plus direct user toggles. Every mutation
replaces whole values so a renderer never sees a half-updated list.

State lives in session_state, so it persists only for the current Streamlit
session. Refreshing the page starts over with an empty list.
"""

from typing import Any, Callable, Iterable, MutableMapping, Optional, Tuple

import streamlit as st

from palette.models import MealTime, PipelineStage, Recipe

# Session state keys
RECIPES_KEY = "palette_recipes"
LOADING_KEY = "palette_loading"
STATUS_KEY = "palette_status"
STAGE_KEY = "palette_stage"
DARK_MODE_KEY = "palette_dark_mode"
MEAL_TIME_KEY = "palette_meal_time"
INGREDIENTS_KEY = "palette_ingredients"

_DEFAULTS = {
    RECIPES_KEY: (),
    LOADING_KEY: False,
    STATUS_KEY: "",
    STAGE_KEY: PipelineStage.IDLE,
    DARK_MODE_KEY: False,
    MEAL_TIME_KEY: MealTime.default(),
    INGREDIENTS_KEY: "",
}


class PaletteState:
    """
    Presentation state holder backed by a mutable mapping.

    Args:
        store: Mapping to keep state in (defaults to st.session_state). Tests pass a dict.
        on_change: Optional callback invoked with the holder after every pipeline
                   lifecycle mutation, used by the page to redraw progressively.
    """

    def __init__(
        self,
        store: Optional[MutableMapping[str, Any]] = None,
        on_change: Optional[Callable[["PaletteState"], None]] = None,
    ) -> None:
        self._store = st.session_state if store is None else store
        self.on_change = on_change
        for key, default in _DEFAULTS.items():
            if key not in self._store:
                self._store[key] = default

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def recipes(self) -> Tuple[Recipe, ...]:
        return self._store[RECIPES_KEY]

    @property
    def loading(self) -> bool:
        return self._store[LOADING_KEY]

    @property
    def status(self) -> str:
        return self._store[STATUS_KEY]

    @property
    def stage(self) -> PipelineStage:
        return self._store[STAGE_KEY]

    @property
    def dark_mode(self) -> bool:
        return self._store[DARK_MODE_KEY]

    @property
    def meal_time(self) -> MealTime:
        return self._store[MEAL_TIME_KEY]

    @property
    def ingredients(self) -> str:
        return self._store[INGREDIENTS_KEY]

    @property
    def images_pending(self) -> bool:
        """True when text-only recipes are shown but their image phase was never finished."""
        return not self.loading and self.stage == PipelineStage.GENERATING_IMAGES and bool(self.recipes)

    # ------------------------------------------------------------------
    # Pipeline lifecycle events
    # ------------------------------------------------------------------

    def begin_generation(self, status: str) -> None:
        """A submission started: clear the list and show the loading overlay."""
        self._store[RECIPES_KEY] = ()
        self._store[STATUS_KEY] = status
        self._store[STAGE_KEY] = PipelineStage.GENERATING_TEXT
        self._store[LOADING_KEY] = True
        self._notify()

    def publish_recipes(self, recipes: Iterable[Recipe], status: str) -> None:
        """Text-only recipes are ready; images are still being generated."""
        self._store[RECIPES_KEY] = tuple(recipes)
        self._store[STATUS_KEY] = status
        self._store[STAGE_KEY] = PipelineStage.GENERATING_IMAGES
        self._notify()

    def resume_images(self, status: str) -> None:
        """An interrupted image phase restarts for the recipes already shown."""
        self._store[STATUS_KEY] = status
        self._store[STAGE_KEY] = PipelineStage.GENERATING_IMAGES
        self._store[LOADING_KEY] = True
        self._notify()

    def complete_generation(self, recipes: Iterable[Recipe]) -> None:
        """The hydrated list replaces the text-only one and loading ends."""
        self._store[RECIPES_KEY] = tuple(recipes)
        self._store[STATUS_KEY] = ""
        self._store[STAGE_KEY] = PipelineStage.COMPLETE
        self._store[LOADING_KEY] = False
        self._notify()

    def fail_generation(self) -> None:
        """The text phase failed: nothing partial is shown."""
        self._store[RECIPES_KEY] = ()
        self._store[STATUS_KEY] = ""
        self._store[STAGE_KEY] = PipelineStage.FAILED
        self._store[LOADING_KEY] = False
        self._notify()

    def reset(self) -> None:
        """Return to idle after a failure has been reported to the user."""
        self._store[STAGE_KEY] = PipelineStage.IDLE
        self._store[STATUS_KEY] = ""
        self._store[LOADING_KEY] = False

    def recover_interrupted_run(self) -> bool:
        """
        Clear a loading flag left behind by a script run that Streamlit stopped.

        Any widget interaction reruns the script and ends the previous run, so
        loading=True at the top of the script means nobody will ever complete it.
        A run stopped during the text phase returns to idle. A run stopped during
        the image phase keeps its text-only recipes visible and stays in
        GENERATING_IMAGES, so images_pending tells the page to hydrate them again.

        Returns:
            True if a stale run was cleared
        """
        if not self.loading:
            return False
        if not (self.stage == PipelineStage.GENERATING_IMAGES and self.recipes):
            self._store[STAGE_KEY] = PipelineStage.IDLE
        self._store[STATUS_KEY] = ""
        self._store[LOADING_KEY] = False
        return True

    # ------------------------------------------------------------------
    # Direct user actions
    # ------------------------------------------------------------------

    def toggle_theme(self) -> None:
        self._store[DARK_MODE_KEY] = not self.dark_mode

    def select_meal_time(self, meal_time: MealTime) -> None:
        self._store[MEAL_TIME_KEY] = MealTime(meal_time)

    def set_ingredients(self, text: str) -> None:
        self._store[INGREDIENTS_KEY] = text


def get_palette_state(on_change: Optional[Callable[[PaletteState], None]] = None) -> PaletteState:
    """
    Get the state holder for the current Streamlit session.

    Automatically initializes missing keys in st.session_state.
    """
    return PaletteState(on_change=on_change)

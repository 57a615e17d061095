"""
Prompt builders and the structured-output schema for recipe generation.

The UI language is Korean, so the recipe prompt is written in Korean. The image
prompt is in English, which the image model follows more reliably.
"""

from typing import Any, Dict

from palette.config import RECIPES_PER_REQUEST
from palette.models import MealTime

# Declared response schema for the text endpoint (Gemini OpenAPI subset).
RECIPE_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "recipes": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING", "description": "Dish title"},
                    "description": {"type": "STRING", "description": "Elegant dish summary"},
                    "ingredients": {
                        "type": "ARRAY",
                        "items": {"type": "STRING"},
                        "description": "Required ingredients",
                    },
                    "instructions": {
                        "type": "ARRAY",
                        "items": {"type": "STRING"},
                        "description": "Step-by-step methodology",
                    },
                },
                "required": ["title", "description", "ingredients", "instructions"],
            },
        },
    },
    "required": ["recipes"],
}

RECIPE_PROMPT_TEMPLATE = (
    '냉장고 재료: "{ingredients}". 식사 시간: "{meal_time}".\n'
    "이 재료들을 사용하여 {meal_time}에 어울리는 고급스럽고 감각적인 요리 {count}가지를 제안해주세요.\n"
    "각 요리는 마치 파인다이닝 메뉴판에 있을 법한 이름과 설명을 가져야 하며, "
    "조리 과정은 단계별로 논리적이고 구체적이어야 합니다."
)

IMAGE_PROMPT_TEMPLATE = (
    "Hyper-realistic close-up professional food photography of '{title}'.\n"
    "Avant-garde plating, top-tier restaurant aesthetic, warm ambient lighting, "
    "highly detailed textures, soft bokeh background, shallow depth of field, "
    "8k resolution, cinematic composition."
)


def build_recipe_prompt(ingredients_text: str, meal_time: MealTime) -> str:
    """
    Build the text-generation instruction for one submission.

    The ingredient text is embedded as typed by the user (no splitting or
    validation happens here).
    """
    return RECIPE_PROMPT_TEMPLATE.format(
        ingredients=ingredients_text,
        meal_time=MealTime(meal_time).value,
        count=RECIPES_PER_REQUEST,
    )


def build_image_prompt(title: str) -> str:
    """Build the food-photography instruction for a single dish."""
    return IMAGE_PROMPT_TEMPLATE.format(title=title)

"""
Layout primitives for the editorial recipe page.

Provides the brand header, the hero headline, one article per recipe and the
footer. All text coming from the model is HTML-escaped before it is injected.
"""

import html
from typing import Sequence

import streamlit as st

from palette.models import Recipe


def page_header() -> None:
    """Render the brand mark (theme toggle is rendered by the page next to it)."""
    st.markdown(
        '<div class="palette-brand"><h1>Palette</h1>'
        '<span class="palette-eyebrow">AI Atelier</span></div>',
        unsafe_allow_html=True,
    )


def hero() -> None:
    """Render the headline and lede above the form."""
    st.markdown('<span class="palette-eyebrow">Epicurean Discovery</span>', unsafe_allow_html=True)
    st.markdown(
        '<h2 class="palette-hero">당신의<br/>냉장고 속<br/>'
        '<span class="accent">숨겨진 미식</span></h2>',
        unsafe_allow_html=True,
    )
    st.markdown(
        '<p class="muted-text">가장 평범한 재료가 예술적인 한 끼로<br/>'
        "재탄생하는 순간을 포착합니다.</p>",
        unsafe_allow_html=True,
    )


def _image_block(recipe: Recipe) -> str:
    if recipe.image_url:
        return (
            f'<div class="palette-image"><img src="{html.escape(recipe.image_url, quote=True)}" '
            f'alt="{html.escape(recipe.title, quote=True)}"/></div>'
        )
    # Placeholder while the image is pending (or when none could be generated)
    return '<div class="palette-image"><span class="faint-text">···</span></div>'


def recipe_article(recipe: Recipe, index: int) -> None:
    """
    Render one recipe as an editorial article.

    Args:
        recipe: Recipe to render (image optional)
        index: Zero-based position, shown as 01, 02, ...
    """
    col_image, col_text = st.columns(2, gap="large")

    with col_image:
        st.markdown(f'<div class="palette-index">{index + 1:02d}</div>', unsafe_allow_html=True)
        st.markdown(_image_block(recipe), unsafe_allow_html=True)

    with col_text:
        st.markdown('<span class="palette-eyebrow">Philosophy</span>', unsafe_allow_html=True)
        st.markdown(f"<h3>{html.escape(recipe.title)}</h3>", unsafe_allow_html=True)
        st.markdown(f'<p class="muted-text">{html.escape(recipe.description)}</p>', unsafe_allow_html=True)

        st.divider()
        st.markdown('<span class="palette-eyebrow">Palette</span>', unsafe_allow_html=True)
        items = "".join(
            f'<li><span class="palette-dot"></span><span class="muted-text">{html.escape(item)}</span></li>'
            for item in recipe.ingredients
        )
        st.markdown(f'<ul style="list-style:none;padding-left:0">{items}</ul>', unsafe_allow_html=True)

        st.divider()
        st.markdown('<span class="palette-eyebrow">Method</span>', unsafe_allow_html=True)
        for step_number, step in enumerate(recipe.instructions, start=1):
            st.markdown(
                f'<p><span class="palette-step-number">{step_number:02d}</span>'
                f'<span class="muted-text">{html.escape(step)}</span></p>',
                unsafe_allow_html=True,
            )


def render_recipes(recipes: Sequence[Recipe]) -> None:
    """Render every recipe in order, separated by generous spacing."""
    for index, recipe in enumerate(recipes):
        recipe_article(recipe, index)
        st.markdown("<div style='height:8rem'></div>", unsafe_allow_html=True)


def render_footer() -> None:
    st.markdown(
        '<div class="palette-footer">'
        "<h2>Chef's Palette</h2>"
        '<p class="faint-text">일상의 재료에서 발견하는 새로운 가치.</p>'
        '<span class="palette-eyebrow">© 2024 AI Culinary Art Studio</span>'
        "</div>",
        unsafe_allow_html=True,
    )

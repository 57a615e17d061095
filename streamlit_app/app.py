"""
Chef's Palette - Streamlit Frontend Entry Point.

Single-page app: the user picks a meal time, types the ingredients in the
fridge, and gets three AI-generated recipes rendered as an editorial article,
each with a generated food photograph.

Run with: streamlit run streamlit_app/app.py
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path so palette and streamlit_app import when run as a script
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any client reads the environment
from palette.config import configure_logging, validate_required_config

import streamlit as st

from palette.generation import FAILURE_NOTICE, generate_palette, resume_hydration
from palette.models import GenerationRequest, MealTime
from streamlit_app.ui.feedback import render_loading_overlay, show_config_warning, show_error
from streamlit_app.ui.layout import hero, page_header, render_footer, render_recipes
from streamlit_app.ui.styles import load_global_styles
from streamlit_app.utils.session import get_or_create_session_id
from streamlit_app.utils.state import PaletteState, get_palette_state

configure_logging()
logger = logging.getLogger(__name__)

# Page configuration - must be called before any other Streamlit commands
st.set_page_config(
    page_title="Chef's Palette",
    page_icon="🍽️",
    layout="wide",
    initial_sidebar_state="collapsed",
)

session_id = get_or_create_session_id()
state = get_palette_state()
if state.recover_interrupted_run():
    logger.info("Cleared loading flag of an interrupted run (session=%s)", session_id)

load_global_styles(dark_mode=state.dark_mode)

# Header: brand mark + theme toggle
col_brand, col_toggle = st.columns([6, 1])
with col_brand:
    page_header()
with col_toggle:
    st.button(
        "☀️" if state.dark_mode else "🌙",
        key="theme_toggle",
        on_click=state.toggle_theme,
        help="Toggle dark mode",
    )

try:
    validate_required_config()
except RuntimeError as e:
    show_config_warning(str(e))

hero()

# Submission form
with st.form("palette_form", border=False):
    col_time, col_inventory = st.columns(2, gap="large")
    with col_time:
        st.markdown('<span class="palette-eyebrow">Interval</span>', unsafe_allow_html=True)
        meal_options = list(MealTime)
        selected_meal_time = st.radio(
            "Interval",
            options=meal_options,
            index=meal_options.index(state.meal_time),
            format_func=lambda meal_time: meal_time.value,
            label_visibility="collapsed",
        )
    with col_inventory:
        st.markdown('<span class="palette-eyebrow">Inventory</span>', unsafe_allow_html=True)
        ingredients_text = st.text_input(
            "Inventory",
            value=state.ingredients,
            placeholder="계란, 우유, 베이컨...",
            label_visibility="collapsed",
        )
        st.caption("Use commas to divide.")

    # Every click reruns this script, which stops any run still in flight, so the
    # newest submission always wins
    submitted = st.form_submit_button("Reveal My Palette", use_container_width=True)

overlay_slot = st.empty()
results_slot = st.empty()


def redraw(current: PaletteState) -> None:
    """Redraw overlay and recipes from the holder (called on every lifecycle event)."""
    if current.loading:
        with overlay_slot.container():
            render_loading_overlay(current.status)
    else:
        overlay_slot.empty()
    with results_slot.container():
        render_recipes(current.recipes)


request = None
if submitted:
    state.select_meal_time(selected_meal_time)
    state.set_ingredients(ingredients_text)
    request = GenerationRequest(ingredients_text=ingredients_text, meal_time=selected_meal_time)

if request is not None and not request.is_blank():
    state.on_change = redraw
    try:
        asyncio.run(generate_palette(request, state, session_id=session_id))
    except Exception as e:
        logger.error("Generation run failed (session=%s): %s", session_id, e)
        show_error(FAILURE_NOTICE)
        state.reset()
    finally:
        state.on_change = None
elif state.images_pending:
    # The previous run was stopped (e.g. by the theme toggle) before its images arrived
    state.on_change = redraw
    try:
        asyncio.run(resume_hydration(state, session_id=session_id))
    finally:
        state.on_change = None

redraw(state)
render_footer()

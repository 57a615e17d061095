"""
Standardized feedback utilities for error, warning and loading states.
"""

import html
from typing import Optional

import streamlit as st


def show_error(message: str, hint: Optional[str] = None) -> None:
    """
    Display a standardized error message with optional hint.

    Args:
        message: Main error message to display
        hint: Optional hint text to help users resolve the issue
    """
    st.error(f"⚠️ {message}")
    if hint:
        st.caption(f"💡 {hint}")


def show_config_warning(message: str) -> None:
    """Display a non-blocking configuration warning (e.g. missing API key)."""
    st.warning(message, icon="🔑")


def render_loading_overlay(status: str) -> None:
    """
    Render the full-screen loading overlay with the current phase description.

    Args:
        status: Human-readable status of the running pipeline phase
    """
    st.markdown(
        f'<div class="palette-overlay"><p>{html.escape(status)}</p></div>',
        unsafe_allow_html=True,
    )

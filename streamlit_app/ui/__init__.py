"""
UI Styling and Components Module.

This module provides global CSS styling, layout primitives and feedback
helpers for the Chef's Palette Streamlit page.
"""

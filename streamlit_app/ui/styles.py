"""
Global CSS Styling for Chef's Palette.

This module provides load_global_styles() to inject the editorial look of the
page: a thin fixed frame, bold tight headings, and two colour themes (light and
dark) expressed as CSS variables.
"""

import streamlit as st

# Theme palettes: point colours, background, frame and text tints
LIGHT_THEME = {
    "--point-primary": "#008080",
    "--point-secondary": "#BFFF00",
    "--bg-main": "#FFFFFF",
    "--text-main": "#0A0A0A",
    "--frame-color": "rgba(0, 0, 0, 0.1)",
    "--text-faint": "rgba(0, 0, 0, 0.5)",
    "--text-muted": "rgba(0, 0, 0, 0.7)",
}

DARK_THEME = {
    "--point-primary": "#00FFCC",
    "--point-secondary": "#FF4D00",
    "--bg-main": "#050505",
    "--text-main": "#F5F5F5",
    "--frame-color": "rgba(255, 255, 255, 0.1)",
    "--text-faint": "rgba(255, 255, 255, 0.6)",
    "--text-muted": "rgba(255, 255, 255, 0.8)",
}


def theme_variables(dark_mode: bool) -> str:
    """Render the :root CSS variable block for the selected theme."""
    palette = DARK_THEME if dark_mode else LIGHT_THEME
    lines = "\n".join(f"            {name}: {value};" for name, value in palette.items())
    return f"""
        :root {{
{lines}
            --unified-lh: 1.1;
        }}
    """


def load_global_styles(dark_mode: bool = False) -> None:
    """
    Inject global CSS styles for the Chef's Palette page.

    This function:
    - Sets the theme variables (light or dark)
    - Paints the app background and text with them
    - Styles headings, the fixed frame, recipe articles and the loading overlay
    """
    css = f"""
    <style>
        {theme_variables(dark_mode)}

        .stApp {{
            background-color: var(--bg-main) !important;
            color: var(--text-main) !important;
        }}

        .stApp p, .stApp label, .stApp li, .stApp span {{
            color: var(--text-main);
        }}

        h1, h2, h3 {{
            line-height: var(--unified-lh) !important;
            font-weight: 700 !important;
            letter-spacing: -0.03em !important;
            color: var(--text-main) !important;
        }}

        .faint-text {{ color: var(--text-faint) !important; }}
        .muted-text {{ color: var(--text-muted) !important; }}

        .palette-frame {{
            position: fixed;
            inset: 1rem;
            border: 1px solid var(--frame-color);
            pointer-events: none;
            z-index: 90;
        }}

        .palette-brand h1 {{
            font-size: 0.875rem !important;
            letter-spacing: 0.4em !important;
            text-transform: uppercase;
            margin: 0 !important;
        }}

        .palette-eyebrow {{
            font-size: 0.6rem;
            font-weight: 700;
            letter-spacing: 0.8em;
            text-transform: uppercase;
            color: var(--text-faint);
        }}

        .palette-hero {{
            font-size: clamp(3rem, 7vw, 4.5rem) !important;
        }}

        .palette-hero .accent {{ color: var(--point-primary); }}

        .stButton > button, .stFormSubmitButton > button {{
            border-radius: 999px !important;
            letter-spacing: 0.6em !important;
            text-transform: uppercase;
            font-size: 0.6rem !important;
            font-weight: 700 !important;
        }}

        .palette-overlay {{
            position: fixed;
            inset: 0;
            z-index: 200;
            background-color: var(--bg-main);
            opacity: 0.95;
            display: flex;
            align-items: center;
            justify-content: center;
        }}

        .palette-overlay p {{
            font-size: 0.6rem;
            font-weight: 700;
            letter-spacing: 1em;
            text-transform: uppercase;
            animation: palette-pulse 1.6s ease-in-out infinite;
        }}

        @keyframes palette-pulse {{
            0%, 100% {{ opacity: 1; }}
            50% {{ opacity: 0.35; }}
        }}

        .palette-image {{
            border-radius: 2rem;
            overflow: hidden;
            aspect-ratio: 4 / 5;
            background: var(--frame-color);
            display: flex;
            align-items: center;
            justify-content: center;
        }}

        .palette-image img {{
            width: 100%;
            height: 100%;
            object-fit: cover;
        }}

        .palette-index {{
            font-size: 3.75rem;
            font-weight: 700;
            opacity: 0.1;
            letter-spacing: -0.05em;
        }}

        .palette-dot {{
            display: inline-block;
            width: 0.25rem;
            height: 0.25rem;
            border-radius: 50%;
            margin-right: 1rem;
            background-color: var(--point-secondary);
        }}

        .palette-step-number {{
            font-size: 1.25rem;
            font-weight: 700;
            color: var(--point-primary);
            opacity: 0.6;
            margin-right: 2rem;
        }}

        .palette-footer {{
            margin-top: 8rem;
            padding-top: 4rem;
            border-top: 1px solid var(--frame-color);
        }}
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
    st.markdown('<div class="palette-frame"></div>', unsafe_allow_html=True)

"""Chef's Palette Streamlit frontend."""

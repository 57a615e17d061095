"""
Utility modules for the Streamlit frontend.

This package contains:
- state: Presentation state holder over st.session_state
- session: Session id helper for the event log
"""

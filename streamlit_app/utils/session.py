"""
Session management utilities for the Streamlit page.

The session id tags event-log records so that one browser session's
generation runs can be followed in events.log.
"""

import uuid
import streamlit as st

SESSION_ID_KEY = "session_id"


def get_or_create_session_id() -> str:
    """
    Get or create a persistent session ID stored in st.session_state.

    The id lives as long as the browser session. Refreshing the page or opening
    a new tab generates a new one.

    Returns:
        Session ID string (UUID format)
    """
    if SESSION_ID_KEY not in st.session_state:
        st.session_state[SESSION_ID_KEY] = str(uuid.uuid4())
    return st.session_state[SESSION_ID_KEY]

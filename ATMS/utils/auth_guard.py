"""
Authentication guard utilities for Streamlit pages.
Provides login-required and role-based access control.
"""

import streamlit as st
from datetime import datetime, timedelta


SESSION_TIMEOUT_MINUTES = 5


def require_login():
    """Stop page execution if nobody is logged in."""
    if "session_data" not in st.session_state:
        st.warning("Please log in to continue.")
        st.stop()
    _check_session_timeout()


def require_role(allowed_roles: list):
    """Stop page execution if session role is not in allowed_roles."""
    require_login()
    if get_user_role() in [role.lower() for role in allowed_roles]:
        return
    st.error("You do not have permission to access this page.")
    st.stop()


def get_current_user() -> dict:
    """Return current session_data or empty dict."""
    return st.session_state.get("session_data", {})


def get_user_role() -> str:
    return str(get_current_user().get("role", "customer")).lower()


def is_logged_in() -> bool:
    return "session_data" in st.session_state


def is_admin() -> bool:
    return get_user_role() == "admin"


def handle_logout():
    """Clear the session and rerun."""
    for key in list(st.session_state.keys()):
        del st.session_state[key]
    st.rerun()


def _check_session_timeout():
    """Auto-logout if the terminal has been idle too long."""
    sd = st.session_state.get("session_data")
    if not sd:
        return
    last_activity = sd.get("last_activity")
    if last_activity and datetime.now() - last_activity > timedelta(minutes=SESSION_TIMEOUT_MINUTES):
        handle_logout()
    else:
        sd["last_activity"] = datetime.now()

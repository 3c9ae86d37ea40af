"""
Process-wide terminal instance for the Streamlit app.
Accounts and inventory are loaded once and shared by every page.
"""

import atexit

import streamlit as st

from core.services.terminal import Terminal


@st.cache_resource(show_spinner="Starting ATM terminal...")
def get_terminal() -> Terminal:
    terminal = Terminal.start()
    atexit.register(terminal.shutdown)
    return terminal

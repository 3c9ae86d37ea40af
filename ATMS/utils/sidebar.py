"""
Shared sidebar renderer for all authenticated pages.
Displays the signed-in account or operator and a logout button.
"""

import streamlit as st
from utils.auth_guard import handle_logout, get_current_user, is_admin
from utils.helpers import StringUtils


def render_sidebar():
    """Render the common sidebar on every authenticated page."""
    with st.sidebar:
        st.markdown("## 🏧 ATM Terminal")
        st.markdown("---")

        sd = get_current_user()
        if sd:
            if is_admin():
                st.markdown("**Operator**")
                st.caption("Admin Console")
            else:
                st.markdown(f"**{sd.get('name', 'Customer')}**")
                st.caption(f"Account {StringUtils.mask_account_number(sd.get('account_number', ''))}")

            st.markdown("---")

            if st.button("Logout", use_container_width=True, key="sidebar_logout"):
                handle_logout()

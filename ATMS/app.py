import streamlit as st
from datetime import datetime
import logging
import os

st.set_page_config(
    page_title="ATM Withdrawal System",
    page_icon="🏧",
    layout="centered",
    initial_sidebar_state="collapsed",
)

from utils.settings import LOG_DIR

# Ensure logs directory exists
if not os.path.exists(LOG_DIR):
    os.makedirs(LOG_DIR)

_root_logger = logging.getLogger()
if not any(isinstance(h, logging.FileHandler) for h in _root_logger.handlers):
    _file_handler = logging.FileHandler(os.path.join(LOG_DIR, "atm.log"))
    _file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    _root_logger.addHandler(_file_handler)
    _root_logger.setLevel(logging.INFO)

from utils.auth_guard import is_logged_in, is_admin
from utils.validators import ATMValidator
from utils.exceptions import ATMSystemException
from utils.terminal_resource import get_terminal


# --- PAGE DEFINITIONS ---
def login_page():
    st.markdown(
        """
        <div style="text-align:center">
            <h1 style="color:#1B4F72">🏧 ATM Withdrawal System</h1>
            <p style="color:#5D6D7E; font-size:1.1rem">Insert card - Enter PIN - Collect cash</p>
        </div>
        """,
        unsafe_allow_html=True,
    )
    st.markdown("---")

    try:
        terminal = get_terminal()
    except Exception as e:
        st.error(f"Terminal unavailable: {e}")
        st.stop()

    tab_customer, tab_admin = st.tabs(["Customer Login", "Admin"])

    with tab_customer:
        with st.form("login_form", clear_on_submit=False):
            account_number = st.text_input("Account Number", placeholder="e.g. 1001")
            pin = st.text_input("PIN", type="password", max_chars=6)
            submitted = st.form_submit_button("Login", use_container_width=True)

        if submitted:
            try:
                acc_num = ATMValidator.validate_account_number(account_number)
                account = terminal.ledger.authenticate(acc_num, ATMValidator.validate_pin(pin))
                st.session_state["session_data"] = {
                    "account_number": account.account_number,
                    "name": account.name,
                    "role": "customer",
                    "login_time": datetime.now(),
                    "last_activity": datetime.now(),
                }
                st.success(f"Login successful. Welcome, {account.name}!")
                st.rerun()
            except ATMSystemException as e:
                st.error(e.message)

    with tab_admin:
        with st.form("admin_login_form"):
            admin_pin = st.text_input("Admin PIN", type="password", max_chars=12)
            admin_submitted = st.form_submit_button("Enter Admin Menu", use_container_width=True)

        if admin_submitted:
            try:
                terminal.admin.verify_admin_pin(admin_pin)
                st.session_state["session_data"] = {
                    "role": "admin",
                    "login_time": datetime.now(),
                    "last_activity": datetime.now(),
                }
                st.rerun()
            except ATMSystemException as e:
                st.error(e.message)


# --- NAVIGATION SETUP ---
if not is_logged_in():
    pg = st.navigation([st.Page(login_page, title="Login", default=True)])
    pg.run()

elif is_admin():
    pg = st.navigation({
        "Administration": [st.Page("pages/3_Admin.py", title="Admin Menu", default=True)],
    })
    pg.run()

else:
    pg = st.navigation({
        "Banking": [
            st.Page("pages/1_Balance.py", title="Balance & History", default=True),
            st.Page("pages/2_Withdraw.py", title="Cash Withdrawal"),
        ],
    })
    pg.run()

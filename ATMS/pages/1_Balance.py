"""
Balance Page - Balance inquiry and transaction history.
Roles: customer
"""

import streamlit as st
import pandas as pd

from utils.auth_guard import require_role, get_current_user
from utils.sidebar import render_sidebar
from utils.formatters import format_currency
from utils.exceptions import ATMSystemException
from utils.terminal_resource import get_terminal

require_role(["customer"])
render_sidebar()

sd = get_current_user()
terminal = get_terminal()
account_number = sd["account_number"]

st.title("Balance & History")
st.markdown("---")

tab_balance, tab_history = st.tabs(["Balance Inquiry", "Transaction History"])

# ===========================
# TAB 1 - Balance Inquiry
# ===========================
with tab_balance:
    st.caption(f"Account: {account_number} | Name: {sd.get('name', '')}")
    if st.button("Show Balance", use_container_width=True, key="show_balance"):
        try:
            balance = terminal.ledger.inquire(account_number)
            st.metric("Available Balance", format_currency(balance))
        except ATMSystemException as e:
            st.error(e.message)

# ===========================
# TAB 2 - Transaction History
# ===========================
with tab_history:
    try:
        records = terminal.ledger.history(account_number)
    except ATMSystemException as e:
        st.error(e.message)
        records = []

    if records:
        df = pd.DataFrame([
            {
                "Date": r.timestamp,
                "Type": r.kind.value,
                "Amount": format_currency(r.amount),
                "Balance": format_currency(r.balance_after_txn),
            }
            for r in records
        ])
        st.dataframe(df, use_container_width=True, hide_index=True)
    else:
        st.info("No transactions found for this account.")

"""
Withdraw Page - Two-step cash withdrawal: review the notes, then confirm.
Roles: customer
"""

import streamlit as st

from utils.auth_guard import require_role, get_current_user
from utils.sidebar import render_sidebar
from utils.formatters import format_currency, format_plan
from utils.exceptions import ATMSystemException
from utils.terminal_resource import get_terminal

require_role(["customer"])
render_sidebar()

sd = get_current_user()
terminal = get_terminal()
coordinator = terminal.withdrawals

st.title("Cash Withdrawal")
st.markdown("---")

# Step 1: amount entry and note selection
if "withdrawal_pending" not in st.session_state:
    with st.form("withdraw_form"):
        wd_amount = st.number_input("Amount (multiples of 100)", min_value=0, step=100, key="wd_amount")
        wd_submitted = st.form_submit_button("Review Withdrawal", use_container_width=True)

    if wd_submitted:
        try:
            st.session_state["withdrawal_pending"] = coordinator.prepare(sd["account_number"], int(wd_amount))
            st.rerun()
        except ATMSystemException as e:
            st.error(e.message)

# Step 2: confirmation
else:
    pending = st.session_state["withdrawal_pending"]

    st.subheader(f"Dispensing {format_currency(pending.amount)}")
    for line in format_plan(pending.plan):
        st.markdown(f"- {line}")

    col_yes, col_no = st.columns(2)
    with col_yes:
        confirmed = st.button("Confirm", type="primary", use_container_width=True, key="wd_confirm")
    with col_no:
        declined = st.button("Cancel", use_container_width=True, key="wd_cancel")

    if confirmed:
        st.session_state.pop("withdrawal_pending")
        try:
            result = coordinator.confirm(pending)
            st.success(f"Transaction successful. New balance: {format_currency(result['new_balance'])}")
            if not result["persisted"]:
                st.warning("The withdrawal could not be saved to storage; it stays valid for this session.")
            if not result["journaled"]:
                st.warning("Transaction not logged.")
        except ATMSystemException as e:
            st.error(e.message)

    if declined:
        st.session_state.pop("withdrawal_pending")
        coordinator.decline(pending)
        st.info("Withdrawal cancelled.")

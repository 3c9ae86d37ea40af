"""
Admin Page - ATM inventory, refills, account list and unlocks.
Roles: admin
"""

import streamlit as st
import pandas as pd

from utils.auth_guard import require_role
from utils.sidebar import render_sidebar
from utils.formatters import format_currency, lock_badge
from utils.exceptions import ATMSystemException
from utils.settings import DENOMINATIONS
from utils.terminal_resource import get_terminal

require_role(["admin"])
render_sidebar()

admin = get_terminal().admin

st.title("Admin Menu")
st.markdown("---")

tab_inventory, tab_refill, tab_accounts = st.tabs(["ATM Inventory", "Refill Notes", "Accounts"])

# ===========================
# TAB 1 - Inventory
# ===========================
with tab_inventory:
    summary = admin.inventory_summary()
    c1, c2 = st.columns(2)
    c1.metric("Total Cash", format_currency(summary["total_value"]))
    c2.metric("Notes Loaded", summary["note_count"])

    df = pd.DataFrame(
        [{"Denomination": f"₹{d}", "Count": c} for d, c in summary["counts"].items()]
    )
    st.dataframe(df, use_container_width=True, hide_index=True)

# ===========================
# TAB 2 - Refill
# ===========================
with tab_refill:
    with st.form("refill_form"):
        deltas = {
            d: st.number_input(f"Additional ₹{d} notes", min_value=0, step=1, key=f"refill_{d}")
            for d in DENOMINATIONS
        }
        refill_submitted = st.form_submit_button("Refill ATM", use_container_width=True)

    if refill_submitted:
        try:
            result = admin.refill({d: int(n) for d, n in deltas.items()})
            st.success(f"ATM refilled successfully. Total cash: {format_currency(result['total_value'])}")
            if not result["persisted"]:
                st.warning("Refill could not be saved to storage.")
        except ATMSystemException as e:
            st.error(e.message)

# ===========================
# TAB 3 - Accounts
# ===========================
with tab_accounts:
    accounts = admin.list_accounts()
    if accounts:
        df = pd.DataFrame([
            {
                "Account": a["account_number"],
                "Name": a["name"],
                "Balance": format_currency(a["balance"]),
                "Status": lock_badge(a["locked"]),
            }
            for a in accounts
        ])
        st.dataframe(df, use_container_width=True, hide_index=True)

    locked = [a["account_number"] for a in accounts if a["locked"]]
    if locked:
        with st.form("unlock_form"):
            to_unlock = st.selectbox("Locked account", options=locked)
            unlock_submitted = st.form_submit_button("Unlock Account", use_container_width=True)

        if unlock_submitted:
            try:
                admin.unlock_account(int(to_unlock))
                st.success(f"Account {to_unlock} unlocked.")
                st.rerun()
            except ATMSystemException as e:
                st.error(e.message)
    else:
        st.info("No locked accounts.")

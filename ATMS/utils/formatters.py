"""
Formatting helpers shared across Streamlit pages.
Currency formatting, date helpers, note breakdowns.
"""

from decimal import Decimal
from datetime import datetime, date
from typing import List, Union

from core.models.entities import DenominationPlan


def format_currency(amount: Union[int, float, Decimal, str]) -> str:
    """Format amount as Indian Rupee currency string."""
    try:
        if isinstance(amount, str):
            amount = Decimal(amount)
        elif isinstance(amount, (int, float)):
            amount = Decimal(str(amount))
        return f"₹{amount:,.2f}"
    except Exception:
        return f"₹{amount}"


def format_date(dt: Union[datetime, date, None]) -> str:
    """Format date for display."""
    if dt is None:
        return "N/A"
    if isinstance(dt, datetime):
        return dt.strftime("%d %b %Y, %I:%M %p")
    return dt.strftime("%d %b %Y")


def format_plan(plan: DenominationPlan) -> List[str]:
    """One line per denomination being dispensed, e.g. '₹2000 x 1'."""
    return [f"₹{denomination} x {count}" for denomination, count in plan.lines()]


def lock_badge(locked: bool) -> str:
    return "Locked" if locked else "Active"

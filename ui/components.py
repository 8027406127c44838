"""Reusable UI components for Streamlit pages."""

from datetime import date
from typing import Optional

import streamlit as st

from src.clients.expenses.schemas import ExpenseRecord, ExpenseStatus

STATUS_BADGES = {
    ExpenseStatus.PENDING: "🟡 Pending",
    ExpenseStatus.APPROVED: "🟢 Approved",
    ExpenseStatus.REJECTED: "🔴 Rejected",
}


def format_amount(amount: float, currency: str = "") -> str:
    text = f"${amount:,.2f}"
    return f"{text} {currency}".strip()


def date_field(container, label: str, value: str) -> str:
    """Calendar picker bound to a YYYY-MM-DD string; "" when no date is picked."""
    current = date.fromisoformat(value) if value else None
    picked = container.date_input(label, value=current, format="YYYY-MM-DD")
    return picked.isoformat() if picked else ""


def display_messages(error: Optional[str], notice: Optional[str]) -> None:
    """Show the session's last error and/or success notice."""
    if error:
        st.error(error)
    if notice:
        st.success(notice)


def display_receipt(expense: ExpenseRecord) -> None:
    """Render images inline; other receipt types show a file-name placeholder."""
    receipt = expense.receipt_file
    st.subheader(f"Receipt from {expense.vendor}")
    if receipt.is_previewable and receipt.content:
        st.image(receipt.raw_bytes(), caption=receipt.name)
    else:
        st.info(f"Preview not available for {receipt.mime_type or 'this file'}")
        st.write(f"File name: {receipt.name}")

"""Viaticos Streamlit UI (separate from clients and the core package)."""

import sys
from pathlib import Path

# Ensure project root is on path so src.* and ui.* resolve
_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

import streamlit as st

from src.clients.expenses.schemas import ExpenseStatus
from ui.services import get_session, init_logging

init_logging()

st.set_page_config(
    page_title="Viaticos",
    page_icon="🧾",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.title("Viaticos: Smart Travel Expense Manager")
st.markdown("Use the **sidebar** to open: **Employee** (upload receipts) or **Accountant** (review expenses).")

session = get_session()
pending = sum(1 for e in session.expenses if e.status == ExpenseStatus.PENDING)
st.metric("Expenses in this session", len(session.expenses))
st.metric("Pending review", pending)

"""Accountant: filter expenses, see totals, approve or reject pending ones."""

import streamlit as st

from src.clients.expenses.review import summarize_by_status
from src.clients.expenses.schemas import ExpenseStatus
from ui.components import STATUS_BADGES, date_field, display_messages, display_receipt, format_amount
from ui.services import get_session

session = get_session()

st.header("📋 Expense Review")
display_messages(session.error, session.notice)

summary_cols = st.columns(3)
for col, summary in zip(summary_cols, summarize_by_status(session.expenses)):
    col.metric(summary.status.value, summary.count, format_amount(summary.amount), delta_color="off")

ALL = ""
filters = session.filters
cols = st.columns(5)
employees = [ALL, *session.employee_options()]
trips = [ALL, *session.trip_options()]
statuses = [ALL, *(s.value for s in ExpenseStatus)]
employee = cols[0].selectbox(
    "Employee", employees, index=employees.index(filters.employee) if filters.employee in employees else 0,
    format_func=lambda v: v or "All employees",
)
trip = cols[1].selectbox(
    "Trip", trips, index=trips.index(filters.trip) if filters.trip in trips else 0,
    format_func=lambda v: v or "All trips",
)
current_status = filters.status.value if filters.status else ALL
status = cols[2].selectbox(
    "Status", statuses, index=statuses.index(current_status), format_func=lambda v: v or "All statuses",
)
start_date = date_field(cols[3], "From", filters.start_date)
end_date = date_field(cols[4], "To", filters.end_date)
session.set_filters(employee=employee, trip=trip, status=status, start_date=start_date, end_date=end_date)
if st.button("Clear filters"):
    session.clear_filters()
    st.rerun()

visible = session.visible_expenses()
if not visible:
    st.info("No expenses match the selected filters.")

header = st.columns([2, 2, 1, 2, 1, 1, 1, 1, 2])
for col, title in zip(header, ["Employee", "Trip", "Date", "Vendor", "Category", "Amount", "Receipt", "Status", "Actions"]):
    col.markdown(f"**{title}**")

for expense in visible:
    row = st.columns([2, 2, 1, 2, 1, 1, 1, 1, 2])
    row[0].write(expense.employee_name)
    row[1].write(expense.trip_name)
    row[2].write(expense.date)
    row[3].write(expense.vendor)
    row[4].write(expense.category)
    row[5].write(format_amount(expense.amount, expense.currency))
    if row[6].button("View", key=f"view_{expense.id}"):
        st.session_state["selected_expense"] = expense.id
    row[7].write(STATUS_BADGES[expense.status])
    if expense.status == ExpenseStatus.PENDING:
        actions = row[8].columns(2)
        if actions[0].button("Approve", key=f"approve_{expense.id}"):
            session.decide(expense.id, ExpenseStatus.APPROVED)
            st.rerun()
        if actions[1].button("Reject", key=f"reject_{expense.id}"):
            session.decide(expense.id, ExpenseStatus.REJECTED)
            st.rerun()

st.markdown(f"### Total: {format_amount(session.visible_total())}")

selected_id = st.session_state.get("selected_expense")
selected = next((e for e in session.expenses if e.id == selected_id), None)
if selected:
    with st.container(border=True):
        display_receipt(selected)
        if st.button("Close"):
            st.session_state.pop("selected_expense", None)
            st.rerun()

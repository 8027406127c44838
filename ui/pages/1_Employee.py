"""Employee: enter names and trip, extract receipts, review fields, submit expenses."""

import streamlit as st

from src.viaticos.config import get_settings
from ui.components import date_field, display_messages
from ui.services import get_extractor, get_session, to_receipt_upload

session = get_session()
settings = get_settings()

st.header("🧾 Register New Expenses")
display_messages(session.error, session.notice)

st.subheader("Employees")
for index, name in enumerate(session.trip.employee_names):
    cols = st.columns([6, 1])
    value = cols[0].text_input(f"Employee name {index + 1}", value=name, key=f"employee_{index}")
    if value != name:
        session.set_employee_name(index, value)
    if len(session.trip.employee_names) > 1 and cols[1].button("Remove", key=f"remove_employee_{index}"):
        session.remove_employee_slot(index)
        st.rerun()
if st.button("Add employee"):
    session.add_employee_slot()
    st.rerun()

st.subheader("Trip / Project")
trip_cols = st.columns(3)
trip_name = trip_cols[0].text_input("Trip name", value=session.trip.trip_name)
trip_start = date_field(trip_cols[1], "Start date", session.trip.trip_start_date)
trip_end = date_field(trip_cols[2], "End date", session.trip.trip_end_date)
session.set_trip(trip_name=trip_name, trip_start_date=trip_start, trip_end_date=trip_end)

st.subheader("Receipts (XML, PDF, JPG, PNG)")
files = st.file_uploader(
    "You can select several files at once.",
    type=[ext.lstrip(".") for ext in settings.ACCEPTED_EXTENSIONS],
    accept_multiple_files=True,
)
if st.button("Extract", type="primary"):
    with st.spinner("Extracting receipts…"):
        session.run_extraction(
            get_extractor(),
            [to_receipt_upload(f) for f in files or []],
            max_concurrency=settings.EXTRACTION_MAX_CONCURRENCY,
        )
    st.rerun()

for number, item in enumerate(session.extractions, start=1):
    with st.container(border=True):
        st.markdown(f"**Receipt {number}:** {item.file_name}")
        cols = st.columns(2)
        edits = {
            "vendor": cols[0].text_input("Vendor", value=item.data.vendor, key=f"vendor_{item.id}"),
            "date": cols[1].text_input("Date", value=item.data.date, key=f"date_{item.id}"),
            "total_amount": cols[0].number_input(
                "Amount", value=float(item.data.total_amount), step=0.01, key=f"amount_{item.id}"
            ),
            "currency": cols[1].text_input("Currency", value=item.data.currency, key=f"currency_{item.id}"),
            "category": cols[0].text_input("Category", value=item.data.category, key=f"category_{item.id}"),
        }
        for field_name, value in edits.items():
            if value != getattr(item.data, field_name):
                session.update_extracted_field(item.id, field_name, value)
        if cols[1].button("Discard", key=f"discard_{item.id}"):
            session.discard_extraction(item.id)
            st.rerun()

if st.button(f"Add {len(session.extractions)} expense(s)", disabled=not session.extractions):
    session.submit()
    st.rerun()

"""Tests for batch submission: validation rules and record assembly."""

import pytest

from src.clients.expenses.schemas import (
    ExpenseStatus,
    ExtractedFields,
    ExtractedReceipt,
    ReceiptUpload,
    TripDetails,
)
from src.clients.expenses.seed import seed_expenses
from src.clients.expenses.submission import (
    assemble_expenses,
    join_employee_names,
    prepend_expenses,
    validate_submission,
    validate_trip,
)
from src.viaticos.exceptions import SubmissionValidationError


def _trip(**overrides):
    values = dict(
        employee_names=["Juan Pérez", "Ana García"],
        trip_name="Visita Cliente Monterrey",
        trip_start_date="2024-05-09",
        trip_end_date="2024-05-11",
    )
    values.update(overrides)
    return TripDetails(**values)


def _held(vendor="Uber", amount=230.0, content=b"\x89PNG-uber"):
    return ExtractedReceipt(
        upload=ReceiptUpload(name=f"{vendor.lower()}.png", mime_type="image/png", content=content),
        data=ExtractedFields(vendor=vendor, date="2024-05-10", total_amount=amount, currency="MXN", category="Transport"),
    )


@pytest.mark.parametrize(
    "trip,message",
    [
        (_trip(employee_names=["", "  "]), "at least one employee name"),
        (_trip(trip_name=""), "trip name"),
        (_trip(trip_start_date=""), "trip start date"),
        (_trip(trip_end_date=" "), "trip end date"),
        (_trip(employee_names=["Juan Pérez", ""]), "Every employee name field must be filled in"),
        (_trip(trip_start_date="2024-05-12", trip_end_date="2024-05-11"), "end date cannot be earlier"),
    ],
)
def test_each_rule_rejects_submission(trip, message):
    with pytest.raises(SubmissionValidationError, match=message):
        assemble_expenses(trip, [_held()])


def test_no_extractions_rejects_submission():
    with pytest.raises(SubmissionValidationError, match="at least one receipt"):
        validate_submission(_trip(), [])


def test_missing_trip_fields_listed_together():
    with pytest.raises(SubmissionValidationError) as exc:
        validate_submission(_trip(trip_name="", trip_end_date=""), [_held()])
    assert str(exc.value) == "Please complete the trip name, trip end date."


@pytest.mark.parametrize(
    "start,end,message",
    [
        ("2024-05-09", "11/05/2024", "trip end date must be a valid date"),
        ("not a date", "also junk", "trip start and end date must be a valid date"),
        ("2024-02-30", "2024-03-02", "trip start date must be a valid date"),
    ],
)
def test_non_iso_trip_dates_rejected_as_malformed(start, end, message):
    with pytest.raises(SubmissionValidationError, match=message):
        validate_trip(_trip(trip_start_date=start, trip_end_date=end))


def test_same_day_trip_is_valid():
    assert validate_submission(_trip(trip_end_date="2024-05-09"), [_held()]) == ["Juan Pérez", "Ana García"]


def test_assemble_builds_one_pending_record_per_extraction():
    held = [_held("Uber", 230.0), _held("Oxxo", 85.5, b"\xff\xd8oxxo")]
    records = assemble_expenses(_trip(employee_names=[" Juan Pérez ", "Ana García"]), held)

    assert len(records) == 2
    assert all(r.status == ExpenseStatus.PENDING for r in records)
    assert {r.employee_name for r in records} == {"Juan Pérez, Ana García"}
    assert {r.trip_name for r in records} == {"Visita Cliente Monterrey"}
    assert {(r.trip_start_date, r.trip_end_date) for r in records} == {("2024-05-09", "2024-05-11")}
    assert [(r.vendor, r.amount) for r in records] == [("Uber", 230.0), ("Oxxo", 85.5)]
    assert len({r.id for r in records} | {h.id for h in held}) == 4


def test_receipt_content_round_trips():
    record = assemble_expenses(_trip(), [_held(content=b"\x89PNG\x00\x01")])[0]
    assert record.receipt_file.name == "uber.png"
    assert record.receipt_file.mime_type == "image/png"
    assert record.receipt_file.raw_bytes() == b"\x89PNG\x00\x01"


def test_resubmission_is_not_deduplicated():
    held = [_held()]
    first = assemble_expenses(_trip(), held)
    second = assemble_expenses(_trip(), held)
    combined = prepend_expenses(first, second)
    assert len(combined) == 2
    assert combined[0].id != combined[1].id


def test_prepend_puts_new_batch_first():
    existing = seed_expenses()
    new = assemble_expenses(_trip(), [_held("Uber"), _held("Oxxo")])
    combined = prepend_expenses(existing, new)
    assert [r.vendor for r in combined[:2]] == ["Uber", "Oxxo"]
    assert [r.id for r in combined[2:]] == [r.id for r in existing]


def test_join_employee_names():
    assert join_employee_names(["Juan Pérez", "Ana García"]) == "Juan Pérez, Ana García"
    assert join_employee_names(["Maria Rodriguez"]) == "Maria Rodriguez"

"""Batch submission: turn held extractions plus trip metadata into Pending expense records."""

import logging

from src.viaticos.exceptions import SubmissionValidationError
from src.viaticos.utils.date_utils import is_iso_date

from .schemas import ExpenseRecord, ExpenseStatus, ExtractedReceipt, ReceiptFile, TripDetails, new_id

logger = logging.getLogger(__name__)

EMPLOYEE_NAME_SEPARATOR = ", "


def validate_trip(trip: TripDetails) -> list[str]:
    """Check employee names and trip fields; return the trimmed employee names.

    A blank employee slot rejects the whole submission rather than being dropped.

    Raises:
        SubmissionValidationError: with a message naming the first failed rule
    """
    names = [(name or "").strip() for name in trip.employee_names]
    if not any(names):
        raise SubmissionValidationError("Please enter at least one employee name.")

    missing = [
        label
        for label, value in (
            ("trip name", trip.trip_name),
            ("trip start date", trip.trip_start_date),
            ("trip end date", trip.trip_end_date),
        )
        if not (value or "").strip()
    ]
    if missing:
        raise SubmissionValidationError(f"Please complete the {', '.join(missing)}.")

    if not all(names):
        raise SubmissionValidationError(
            "Every employee name field must be filled in. Remove empty name fields before submitting."
        )

    start, end = trip.trip_start_date.strip(), trip.trip_end_date.strip()
    malformed = [label for label, value in (("start", start), ("end", end)) if not is_iso_date(value)]
    if malformed:
        raise SubmissionValidationError(
            f"The trip {' and '.join(malformed)} date must be a valid date in YYYY-MM-DD format."
        )
    if end < start:
        raise SubmissionValidationError("The trip end date cannot be earlier than the start date.")
    return names


def validate_submission(trip: TripDetails, extractions: list[ExtractedReceipt]) -> list[str]:
    """Check every submission precondition; return the trimmed employee names."""
    names = validate_trip(trip)
    if not extractions:
        raise SubmissionValidationError("Extract information from at least one receipt before submitting.")
    return names


def join_employee_names(names: list[str]) -> str:
    return EMPLOYEE_NAME_SEPARATOR.join(names)


def assemble_expenses(trip: TripDetails, extractions: list[ExtractedReceipt]) -> list[ExpenseRecord]:
    """Build one Pending ExpenseRecord per held extraction (no deduplication).

    Raises:
        SubmissionValidationError: preconditions do not hold; nothing is built
    """
    names = validate_submission(trip, extractions)
    employee_name = join_employee_names(names)
    records = [
        ExpenseRecord(
            id=new_id(),
            employee_name=employee_name,
            trip_name=trip.trip_name.strip(),
            trip_start_date=trip.trip_start_date.strip(),
            trip_end_date=trip.trip_end_date.strip(),
            vendor=item.data.vendor,
            date=item.data.date,
            amount=item.data.total_amount,
            currency=item.data.currency,
            category=item.data.category,
            receipt_file=ReceiptFile.from_upload(item.upload),
            status=ExpenseStatus.PENDING,
        )
        for item in extractions
    ]
    logger.info("Assembled %s expense(s) for %s / %s", len(records), employee_name, trip.trip_name)
    return records


def prepend_expenses(existing: list[ExpenseRecord], new: list[ExpenseRecord]) -> list[ExpenseRecord]:
    """Newest first: the new batch goes ahead of prior records."""
    return [*new, *existing]

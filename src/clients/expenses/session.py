"""Review session: one explicit state object for the employee and accountant flows.

Every transition either succeeds and updates state, or records a message in
``error`` and leaves the previous state untouched. Nothing here raises for
user-level problems, so UI callbacks can call transitions directly.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from src.viaticos.exceptions import (
    ExpenseNotFoundError,
    InvalidStatusTransitionError,
    NoFilesSelectedError,
    SubmissionValidationError,
)

from . import review
from .batch import BatchExtractionOutcome, extract_batch
from .extraction import ReceiptExtractor
from .schemas import (
    ExpenseRecord,
    ExpenseStatus,
    ExtractedFields,
    ExtractedReceipt,
    ReceiptUpload,
    ReviewFilters,
    TripDetails,
)
from .seed import seed_expenses
from .submission import assemble_expenses, prepend_expenses

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("vendor", "date", "total_amount", "currency", "category")
TRIP_FIELDS = ("trip_name", "trip_start_date", "trip_end_date")


@dataclass
class ExpenseSession:
    """In-memory state: expense records, the pending submission, and review filters."""

    expenses: list[ExpenseRecord] = field(default_factory=list)
    trip: TripDetails = field(default_factory=TripDetails)
    extractions: list[ExtractedReceipt] = field(default_factory=list)
    filters: ReviewFilters = field(default_factory=ReviewFilters)
    error: Optional[str] = None
    notice: Optional[str] = None

    @classmethod
    def with_seed_data(cls) -> "ExpenseSession":
        return cls(expenses=seed_expenses())

    def clear_messages(self) -> None:
        self.error = None
        self.notice = None

    # --- Employee name slots ---
    def add_employee_slot(self) -> None:
        self.trip = self.trip.model_copy(update={"employee_names": [*self.trip.employee_names, ""]})

    def set_employee_name(self, index: int, name: str) -> None:
        names = list(self.trip.employee_names)
        names[index] = name
        self.trip = self.trip.model_copy(update={"employee_names": names})

    def remove_employee_slot(self, index: int) -> None:
        """Remove one name slot; the last remaining slot is kept."""
        if len(self.trip.employee_names) <= 1:
            return
        names = [n for i, n in enumerate(self.trip.employee_names) if i != index]
        self.trip = self.trip.model_copy(update={"employee_names": names})

    def set_trip(self, **changes: str) -> None:
        unknown = set(changes) - set(TRIP_FIELDS)
        if unknown:
            raise ValueError(f"Unknown trip field(s): {', '.join(sorted(unknown))}")
        self.trip = self.trip.model_copy(update=changes)

    # --- Extraction ---
    def run_extraction(
        self,
        extractor: ReceiptExtractor,
        uploads: Iterable[ReceiptUpload],
        max_concurrency: int = 0,
    ) -> Optional[BatchExtractionOutcome]:
        """Extract a new selection of files, replacing any held extractions.

        Failed files are dropped and summarized in ``error``; successes are kept.
        """
        self.clear_messages()
        try:
            outcome = extract_batch(extractor, uploads, max_concurrency=max_concurrency)
        except NoFilesSelectedError as e:
            self.error = str(e)
            return None
        self.extractions = outcome.extractions
        self.error = outcome.summary_message()
        return outcome

    def update_extracted_field(self, extraction_id: str, field_name: str, value: Any) -> None:
        """Hand-edit one field of a held extraction before submission."""
        if field_name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown extracted field: {field_name}")
        if field_name == "total_amount":
            value = float(value or 0)
        for i, item in enumerate(self.extractions):
            if item.id == extraction_id:
                data: ExtractedFields = item.data.model_copy(update={field_name: value})
                self.extractions[i] = item.model_copy(update={"data": data})
                return
        raise KeyError(extraction_id)

    def discard_extraction(self, extraction_id: str) -> None:
        self.extractions = [e for e in self.extractions if e.id != extraction_id]

    # --- Submission ---
    def submit(self) -> list[ExpenseRecord]:
        """Add held extractions as Pending expenses; employee names are kept for the next batch."""
        self.clear_messages()
        try:
            new_expenses = assemble_expenses(self.trip, self.extractions)
        except SubmissionValidationError as e:
            self.error = str(e)
            return []
        self.expenses = prepend_expenses(self.expenses, new_expenses)
        self.extractions = []
        self.trip = TripDetails(employee_names=list(self.trip.employee_names))
        self.notice = f"{len(new_expenses)} expense(s) added successfully."
        return new_expenses

    # --- Review ---
    def set_filters(self, **changes: Any) -> None:
        """Merge filter changes; invalid values keep the previous filters and set ``error``."""
        try:
            self.filters = ReviewFilters.model_validate({**self.filters.model_dump(), **changes})
        except ValidationError as e:
            logger.warning("Filter change rejected: %s", e)
            self.error = "Invalid review filters: " + "; ".join(err["msg"] for err in e.errors())

    def clear_filters(self) -> None:
        """Drop every filter, including status (show all statuses)."""
        self.filters = ReviewFilters(status=None)

    def visible_expenses(self) -> list[ExpenseRecord]:
        return review.filter_expenses(self.expenses, self.filters)

    def visible_total(self) -> float:
        return review.total_amount(self.visible_expenses())

    def employee_options(self) -> list[str]:
        return review.employee_options(self.expenses)

    def trip_options(self) -> list[str]:
        return review.trip_options(self.expenses)

    def decide(self, expense_id: str, status: ExpenseStatus) -> bool:
        """Approve or reject one Pending expense. Returns False (and sets error) if not allowed."""
        self.clear_messages()
        try:
            self.expenses = review.apply_status(self.expenses, expense_id, status)
        except (ExpenseNotFoundError, InvalidStatusTransitionError) as e:
            logger.warning("Status change rejected: %s", e)
            self.error = str(e)
            return False
        return True

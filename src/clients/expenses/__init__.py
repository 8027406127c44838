"""Expenses client: extract receipts with an LLM, submit batches, review and approve."""

from .batch import BatchExtractionOutcome, aextract_batch, extract_batch
from .extraction import (
    ExtractionFailure,
    ExtractionRequest,
    ExtractionResult,
    FailureReason,
    ReceiptExtractor,
    build_extraction_request,
)
from .review import apply_status, employee_options, filter_expenses, total_amount, trip_options
from .schemas import (
    ExpenseRecord,
    ExpenseStatus,
    ExtractedFields,
    ExtractedReceipt,
    ReceiptFile,
    ReceiptUpload,
    ReviewFilters,
    TripDetails,
)
from .session import ExpenseSession
from .submission import assemble_expenses, prepend_expenses

__all__ = [
    "BatchExtractionOutcome",
    "aextract_batch",
    "extract_batch",
    "ExtractionFailure",
    "ExtractionRequest",
    "ExtractionResult",
    "FailureReason",
    "ReceiptExtractor",
    "build_extraction_request",
    "apply_status",
    "employee_options",
    "filter_expenses",
    "total_amount",
    "trip_options",
    "ExpenseRecord",
    "ExpenseStatus",
    "ExtractedFields",
    "ExtractedReceipt",
    "ReceiptFile",
    "ReceiptUpload",
    "ReviewFilters",
    "TripDetails",
    "ExpenseSession",
    "assemble_expenses",
    "prepend_expenses",
]

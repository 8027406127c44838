"""
Receipt runner: extract expense data from receipt files on disk (CLI).
With employee and trip details, also assembles Pending expense records.

Usage:
  python -m src.clients.expenses.runner --files receipts/comida.jpg receipts/hotel.pdf
  python -m src.clients.expenses.runner --files factura.xml uber.png \\
      --employee "Juan Pérez" --employee "Ana García" --trip "Visita Cliente Monterrey" \\
      --start 2024-05-09 --end 2024-05-11 --output expenses.json

Exit codes: 0 success, 1 usage/validation, 2 partial failure, 3 total failure.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

# Ensure project root on path when run as __main__
if __name__ == "__main__":
    _root = Path(__file__).resolve().parents[3]
    if str(_root) not in sys.path:
        sys.path.insert(0, str(_root))

from src.viaticos.config import get_settings
from src.viaticos.exceptions import SubmissionValidationError
from src.viaticos.logging_config import setup_logging

from .batch import extract_batch
from .extraction import ExtractionFailure, ReceiptExtractor
from .review import summarize_by_status
from .schemas import ExpenseRecord, ReceiptUpload, TripDetails
from .submission import assemble_expenses, validate_trip

logger = logging.getLogger(__name__)


class ExitCode:
    SUCCESS = 0
    USAGE_OR_VALIDATION = 1
    PARTIAL_FAILURE = 2
    TOTAL_FAILURE = 3


def _failure_dict(file_name: str, failure: ExtractionFailure) -> dict[str, Any]:
    return {"file_name": file_name, "reason": failure.reason.value, "error": failure.message}


def _expense_dict(expense: ExpenseRecord, include_receipts: bool) -> dict[str, Any]:
    exclude = None if include_receipts else {"receipt_file": {"content"}}
    return expense.model_dump(mode="json", exclude=exclude)


def _load_uploads(paths: list[Path]) -> list[ReceiptUpload]:
    missing = [str(p) for p in paths if not Path(p).is_file()]
    if missing:
        raise FileNotFoundError(f"Receipt file(s) not found: {', '.join(missing)}")
    return [ReceiptUpload.from_path(Path(p)) for p in paths]


def _trip_from_args(args: argparse.Namespace) -> Optional[TripDetails]:
    """TripDetails when any trip option was given, else None (extract only)."""
    if not (args.employee or args.trip or args.start or args.end):
        return None
    return TripDetails(
        employee_names=args.employee or [""],
        trip_name=args.trip or "",
        trip_start_date=args.start or "",
        trip_end_date=args.end or "",
    )


def run(
    files: list[Path],
    trip: Optional[TripDetails] = None,
    extractor: Optional[ReceiptExtractor] = None,
    max_concurrency: Optional[int] = None,
    include_receipts: bool = False,
) -> tuple[dict[str, Any], int]:
    """
    Extract receipts and optionally assemble expenses.
    Returns (JSON-ready payload, exit code).

    Raises:
        FileNotFoundError: a receipt path does not exist
        SubmissionValidationError: trip details are incomplete (checked before any extraction)
    """
    settings = get_settings()
    uploads = _load_uploads(files)
    if trip is not None:
        validate_trip(trip)

    extractor = extractor or ReceiptExtractor(settings=settings)
    if max_concurrency is None:
        max_concurrency = settings.EXTRACTION_MAX_CONCURRENCY
    outcome = extract_batch(extractor, uploads, max_concurrency=max_concurrency)

    payload: dict[str, Any] = {
        "extractions": [
            {"id": item.id, "file_name": item.file_name, "data": item.data.model_dump(by_alias=True)}
            for item in outcome.extractions
        ],
        "failures": [_failure_dict(f.file_name, f.failure) for f in outcome.failures],
        "summary": {
            "total": outcome.total,
            "extracted": len(outcome.extractions),
            "failed": outcome.failed_count,
        },
    }

    if trip is not None and outcome.extractions:
        expenses = assemble_expenses(trip, outcome.extractions)
        payload["expenses"] = [_expense_dict(e, include_receipts) for e in expenses]
        payload["summary"]["by_status"] = [
            s.model_dump(mode="json") for s in summarize_by_status(expenses)
        ]

    if not outcome.failures:
        return payload, ExitCode.SUCCESS
    if outcome.extractions:
        return payload, ExitCode.PARTIAL_FAILURE
    return payload, ExitCode.TOTAL_FAILURE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract vendor, date, amount, currency, and category from receipts (images, PDF, XML).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--files", "-f", required=True, nargs="+", type=Path, help="Receipt files (.xml, .pdf, .jpg, .jpeg, .png).")
    parser.add_argument("--employee", "-e", action="append", default=None, help="Employee name; repeat for several employees.")
    parser.add_argument("--trip", "-t", default=None, help="Trip or project name.")
    parser.add_argument("--start", default=None, help="Trip start date (YYYY-MM-DD).")
    parser.add_argument("--end", default=None, help="Trip end date (YYYY-MM-DD).")
    parser.add_argument("--max-concurrency", type=int, default=None, metavar="N", help="Max simultaneous extraction requests (0 = all at once; default from EXTRACTION_MAX_CONCURRENCY).")
    parser.add_argument("--include-receipts", action="store_true", help="Embed base64 receipt content in expense output.")
    parser.add_argument("--output", "-o", type=Path, help="Write results JSON to this file; default stdout.")
    parser.add_argument("--log-level", choices=("DEBUG", "INFO", "WARNING", "ERROR"), default="INFO", help="Logging level (default: INFO).")
    parser.add_argument("--log-file", type=Path, default=None, help="Optional log file path.")
    return parser


def main(argv: Optional[list[str]] = None, extractor: Optional[ReceiptExtractor] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        payload, code = run(
            files=args.files,
            trip=_trip_from_args(args),
            extractor=extractor,
            max_concurrency=args.max_concurrency,
            include_receipts=args.include_receipts,
        )
    except (SubmissionValidationError, FileNotFoundError) as e:
        logger.error("Validation failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.USAGE_OR_VALIDATION

    text = json.dumps(payload, indent=2, default=str, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        print(text)
    return code


if __name__ == "__main__":
    sys.exit(main())

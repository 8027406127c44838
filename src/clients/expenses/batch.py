"""Batch extraction: launch every file, wait for all, partition by outcome."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from src.viaticos.exceptions import NoFilesSelectedError

from .extraction import ExtractionFailure, ExtractionResult, FailureReason, ReceiptExtractor
from .schemas import ExtractedReceipt, ReceiptUpload

logger = logging.getLogger(__name__)


@dataclass
class FailedExtraction:
    file_name: str
    failure: ExtractionFailure


@dataclass
class BatchExtractionOutcome:
    """Successes (with fresh ids) and failures, both in input order."""

    extractions: list[ExtractedReceipt] = field(default_factory=list)
    failures: list[FailedExtraction] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.extractions) + len(self.failures)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    def summary_message(self) -> Optional[str]:
        """Single user-facing summary of failed files, or None when every file succeeded."""
        if not self.failures:
            return None
        reasons = list(dict.fromkeys(f.failure.message for f in self.failures))
        message = (
            f"Could not extract information from {self.failed_count} file(s). "
            "Review the receipts shown below."
        )
        return f"{message} {' '.join(reasons)}"


async def aextract_batch(
    extractor: ReceiptExtractor,
    uploads: Iterable[ReceiptUpload],
    max_concurrency: int = 0,
) -> BatchExtractionOutcome:
    """Extract all uploads concurrently and settle every outcome.

    max_concurrency > 0 bounds the number of in-flight requests; results are
    the same either way. One file's failure never cancels another.

    Raises:
        NoFilesSelectedError: uploads is empty (no request is made)
    """
    uploads = list(uploads)
    if not uploads:
        raise NoFilesSelectedError()

    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency > 0 else None

    async def _one(upload: ReceiptUpload) -> ExtractionResult:
        if semaphore is None:
            return await extractor.aextract(upload)
        async with semaphore:
            return await extractor.aextract(upload)

    logger.info("Extracting %s file(s) (max_concurrency=%s)", len(uploads), max_concurrency or "unbounded")
    results = await asyncio.gather(*(_one(u) for u in uploads), return_exceptions=True)

    outcome = BatchExtractionOutcome()
    for upload, result in zip(uploads, results):
        if isinstance(result, Exception):
            # aextract converts errors itself; this only catches bugs in custom extractors
            logger.error("Extraction raised for %s: %r", upload.name, result)
            failure = ExtractionFailure.of(FailureReason.UNKNOWN, str(result))
            outcome.failures.append(FailedExtraction(upload.name, failure))
        elif result.ok:
            outcome.extractions.append(ExtractedReceipt(upload=upload, data=result.data))
        else:
            outcome.failures.append(FailedExtraction(upload.name, result.failure))

    if outcome.failures:
        logger.warning("%s of %s file(s) failed extraction", outcome.failed_count, outcome.total)
    return outcome


def extract_batch(
    extractor: ReceiptExtractor,
    uploads: Iterable[ReceiptUpload],
    max_concurrency: int = 0,
) -> BatchExtractionOutcome:
    """Sync wrapper around aextract_batch (Streamlit, CLI)."""
    uploads = list(uploads)
    if not uploads:
        raise NoFilesSelectedError()
    return asyncio.run(aextract_batch(extractor, uploads, max_concurrency=max_concurrency))

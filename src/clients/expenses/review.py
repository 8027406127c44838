"""Review flow: filtering, totals, filter options, and status transitions."""

import logging
from typing import Iterable, Optional

from src.viaticos.exceptions import ExpenseNotFoundError, InvalidStatusTransitionError

from .schemas import ExpenseRecord, ExpenseStatus, ReviewFilters, StatusSummary

logger = logging.getLogger(__name__)

REVIEW_DECISIONS = (ExpenseStatus.APPROVED, ExpenseStatus.REJECTED)


def matches(expense: ExpenseRecord, filters: ReviewFilters) -> bool:
    """True if the expense satisfies every active filter.

    Dates are compared as YYYY-MM-DD strings, which sort in date order.
    """
    employee = filters.employee.strip()
    if employee and employee not in expense.employee_names:
        return False
    if filters.trip and expense.trip_name != filters.trip:
        return False
    if filters.start_date and expense.date < filters.start_date:
        return False
    if filters.end_date and expense.date > filters.end_date:
        return False
    if filters.status is not None and expense.status != filters.status:
        return False
    return True


def filter_expenses(expenses: Iterable[ExpenseRecord], filters: Optional[ReviewFilters] = None) -> list[ExpenseRecord]:
    filters = filters or ReviewFilters()
    return [e for e in expenses if matches(e, filters)]


def total_amount(expenses: Iterable[ExpenseRecord]) -> float:
    return sum(e.amount for e in expenses)


def employee_options(expenses: Iterable[ExpenseRecord]) -> list[str]:
    """Distinct employee names across records (combined names split), sorted."""
    return sorted({name for e in expenses for name in e.employee_names if name})


def trip_options(expenses: Iterable[ExpenseRecord]) -> list[str]:
    """Distinct trip names in first-seen order."""
    return list(dict.fromkeys(e.trip_name for e in expenses))


def summarize_by_status(expenses: Iterable[ExpenseRecord]) -> list[StatusSummary]:
    """Count and amount per status, in Pending/Approved/Rejected order."""
    summaries = {status: StatusSummary(status=status) for status in ExpenseStatus}
    for e in expenses:
        summary = summaries[e.status]
        summary.count += 1
        summary.amount += e.amount
    return list(summaries.values())


def apply_status(
    expenses: list[ExpenseRecord],
    expense_id: str,
    status: ExpenseStatus,
) -> list[ExpenseRecord]:
    """Return a new list with one Pending expense moved to Approved or Rejected.

    Raises:
        InvalidStatusTransitionError: status is not a decision, or the expense is not Pending
        ExpenseNotFoundError: no expense has expense_id
    """
    status = ExpenseStatus(status)
    if status not in REVIEW_DECISIONS:
        raise InvalidStatusTransitionError(status.value)

    index = next((i for i, e in enumerate(expenses) if e.id == expense_id), None)
    if index is None:
        raise ExpenseNotFoundError(expense_id)
    current = expenses[index]
    if current.status != ExpenseStatus.PENDING:
        raise InvalidStatusTransitionError(status.value, current.status.value)

    updated = list(expenses)
    updated[index] = current.model_copy(update={"status": status})
    logger.info("Expense %s (%s) marked %s", expense_id, current.vendor, status.value)
    return updated

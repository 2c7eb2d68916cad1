"""Page slicing for monthly reports."""
from __future__ import annotations

from app.core.exceptions import PageNotFoundError
from app.models.schemas import MonthlyReport, ReturnResultResponse


def paginate(report: MonthlyReport, skip: int, take: int) -> ReturnResultResponse:
    """Return page ``skip`` of ``report`` holding at most ``take`` results.

    ``skip`` is a zero-based page index, not a record offset: page ``n`` starts
    at record ``n * take``. ``total_records`` is always the size of the whole
    report. A report with no results has no pages at all, and ``take == 0``
    against a non-empty report yields an empty first page.

    Raises:
        PageNotFoundError: when the page starts at or beyond the last record.
    """
    total = len(report.return_results)
    start = skip * take
    end = min(start + take, total)

    if start >= total:
        raise PageNotFoundError(skip)
    return ReturnResultResponse(total_records=total, return_results=list(report.return_results[start:end]))

"""Pydantic schemas for API requests and responses."""
from .report import (
    ErrorResponse,
    IssueIdentifiedMessage,
    MonthlyReport,
    MonthlyReportIn,
    ReturnResult,
    ReturnResultResponse,
)

__all__ = [
    "ErrorResponse",
    "IssueIdentifiedMessage",
    "MonthlyReport",
    "MonthlyReportIn",
    "ReturnResult",
    "ReturnResultResponse",
]

"""Exception hierarchy for the NPS stub.

Every failure the stub can answer with is one of these classes. Each carries a
stable machine-readable ``code``, a human ``message`` and the HTTP status it
maps to, so route handlers never build error bodies by hand.

Codes mirror the ones the real NPS service returns:
- BAD_REQUEST            400
- FORBIDDEN              403
- REPORT_NOT_FOUND       404
- PAGE_NOT_FOUND         404
- INTERNAL_SERVER_ERROR  500
- SERVICE_UNAVAILABLE    503
"""

from __future__ import annotations

from typing import Any

INTERNAL_ISSUE_MESSAGE = "Internal issue, try again later"


class NpsStubException(Exception):
    """Base exception for all NPS stub errors.

    All custom exceptions inherit from this to enable centralized error handling.
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
    ):
        """Initialize exception with message and metadata.

        Args:
            message: Human-readable error message returned to the caller
            code: Stable error code (e.g., "BAD_REQUEST")
            status_code: HTTP status code (default: 400 Bad Request)
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the NPS error response format."""
        return {
            "code": self.code,
            "message": self.message,
        }


# ============================================================================
# CLIENT ERRORS
# ============================================================================

class BadRequestError(NpsStubException):
    """Submission rejected as invalid."""

    def __init__(self):
        super().__init__(
            message="Bad request",
            code="BAD_REQUEST",
            status_code=400,
        )


class MissingBearerTokenError(NpsStubException):
    """Request arrived without an Authorization bearer credential."""

    def __init__(self):
        super().__init__(
            message="Missing required bearer token",
            code="FORBIDDEN",
            status_code=403,
        )


# ============================================================================
# REPORT ERRORS
# ============================================================================

class ReportError(NpsStubException):
    """Base class for monthly report lookup errors."""
    pass


class ReportNotFoundError(ReportError):
    """No report stored for the reference number, tax year and month."""

    def __init__(self):
        super().__init__(
            message="Report not found",
            code="REPORT_NOT_FOUND",
            status_code=404,
        )


class PageNotFoundError(ReportError):
    """Requested page index lies beyond the last page of the report."""

    def __init__(self, skip: int):
        super().__init__(
            message=f"No page {skip} found",
            code="PAGE_NOT_FOUND",
            status_code=404,
        )
        self.skip = skip


# ============================================================================
# SYSTEM ERRORS
# ============================================================================

class InternalServerError(NpsStubException):
    """NPS failed internally."""

    def __init__(self, message: str = INTERNAL_ISSUE_MESSAGE):
        super().__init__(
            message=message,
            code="INTERNAL_SERVER_ERROR",
            status_code=500,
        )

    @classmethod
    def from_exception(cls, exc: BaseException) -> InternalServerError:
        return cls(f"Failed with exception: {exc}")


class ServiceUnavailableError(NpsStubException):
    """NPS is not accepting requests."""

    def __init__(self):
        super().__init__(
            message="Service unavailable",
            code="SERVICE_UNAVAILABLE",
            status_code=503,
        )

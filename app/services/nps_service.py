"""
NPS stub service.

Handles:
- Monthly return submissions
- Declarations
- Paginated monthly report retrieval

Every call first goes through the reserved reference number table in
``app.services.scenarios``; only unreserved reference numbers reach the
store or the paginator.
"""
import logging
import time

from app import metrics
from app.core.audit import log_audit_event, log_failure
from app.core.exceptions import InternalServerError, NpsStubException, ReportNotFoundError
from app.models.schemas import ReturnResultResponse
from app.services.pagination import paginate
from app.services.report_store import ReportStore
from app.services.scenarios import Operation, raise_for_scenario

logger = logging.getLogger(__name__)


class NpsService:
    """Answers NPS calls for a single request; holds no state beyond its store."""

    def __init__(self, store: ReportStore):
        self.store = store

    def submit_monthly_return(self, isa_reference_number: str) -> None:
        try:
            raise_for_scenario(Operation.SUBMIT, isa_reference_number)
        except NpsStubException as exc:
            logger.warning("Rejected submission for IM ref: [%s] with [%s]", isa_reference_number, exc.code)
            log_failure("nps.submit", isa_reference_number, error=exc.code, status_code=exc.status_code)
            metrics.submission_handled(exc.code)
            raise
        logger.info("Successfully submitted data for IM ref: [%s]", isa_reference_number)
        log_audit_event("nps.submit", isa_reference_number, status_code=204)
        metrics.submission_handled()

    def send_declaration(self, isa_reference_number: str) -> None:
        try:
            raise_for_scenario(Operation.DECLARE, isa_reference_number)
        except NpsStubException as exc:
            logger.warning("Rejected declaration for IM ref: [%s] with [%s]", isa_reference_number, exc.code)
            log_failure("nps.declaration", isa_reference_number, error=exc.code, status_code=exc.status_code)
            metrics.declaration_handled(exc.code)
            raise
        logger.info("Successfully submitted declaration for IM Ref: [%s]", isa_reference_number)
        log_audit_event("nps.declaration", isa_reference_number, status_code=204)
        metrics.declaration_handled()

    async def get_monthly_report(
        self,
        isa_reference_number: str,
        tax_year: str,
        month: str,
        skip: int,
        take: int,
    ) -> ReturnResultResponse:
        """Return one page of the stored report.

        Raises:
            InternalServerError: reserved reference number, or the store failed
            ReportNotFoundError: nothing stored for the reference, year and month
            PageNotFoundError: the report has no page ``skip``
        """
        try:
            page = await self._fetch_page(isa_reference_number, tax_year, month, skip, take)
        except NpsStubException as exc:
            metrics.report_fetch_handled(exc.code)
            raise
        metrics.report_fetch_handled()
        return page

    async def _fetch_page(
        self,
        isa_reference_number: str,
        tax_year: str,
        month: str,
        skip: int,
        take: int,
    ) -> ReturnResultResponse:
        try:
            raise_for_scenario(Operation.FETCH, isa_reference_number)
        except NpsStubException as exc:
            logger.warning(
                "Rejected monthly report request for IM ref: [%s] for [%s][%s] with [%s]",
                isa_reference_number,
                month,
                tax_year,
                exc.code,
            )
            raise

        started = time.perf_counter()
        try:
            report = await self.store.get_monthly_report(isa_reference_number, tax_year, month)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Unexpected error retrieving monthly report for IM ref: [%s] for [%s][%s] with: [%s]",
                isa_reference_number,
                month,
                tax_year,
                exc,
            )
            raise InternalServerError.from_exception(exc) from exc
        finally:
            metrics.observe_report_store_latency(time.perf_counter() - started)

        if report is None:
            logger.warning("No monthly report found for IM ref: [%s] for [%s][%s]", isa_reference_number, month, tax_year)
            raise ReportNotFoundError()

        try:
            page = paginate(report, skip, take)
        except NpsStubException:
            logger.warning(
                "Page not found in report for IM ref: [%s] for [%s][%s]", isa_reference_number, month, tax_year
            )
            raise
        logger.info(
            "Successful retrieval of monthly report for IM ref: [%s] for [%s][%s]", isa_reference_number, month, tax_year
        )
        return page

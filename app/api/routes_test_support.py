"""Test-only endpoints for seeding and clearing monthly reports.

Mounted only when ``TEST_SUPPORT_ROUTES_ENABLED`` is set.
"""
from fastapi import APIRouter, Response

from app.api.dependencies import ReportStoreDep
from app.core.exceptions import ReportNotFoundError
from app.models.schemas import MonthlyReport, MonthlyReportIn

router = APIRouter(prefix="/test-only", tags=["test-support"])


@router.post("/monthly/{isa_reference_number}/{tax_year}/{month}", status_code=204)
async def insert_monthly_report(
    isa_reference_number: str,
    tax_year: str,
    month: str,
    body: MonthlyReportIn,
    store: ReportStoreDep,
) -> Response:
    """Store (or replace) the report served for the reference, year and month."""
    report = MonthlyReport(
        isa_manager_reference_number=isa_reference_number,
        year=tax_year,
        month=month,
        return_results=body.return_results,
    )
    await store.insert_report(report)
    return Response(status_code=204)


@router.delete("/monthly/{isa_reference_number}/{tax_year}/{month}", status_code=204)
async def delete_monthly_report(
    isa_reference_number: str,
    tax_year: str,
    month: str,
    store: ReportStoreDep,
) -> Response:
    if not await store.delete_report(isa_reference_number, tax_year, month):
        raise ReportNotFoundError()
    return Response(status_code=204)

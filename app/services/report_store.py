"""Monthly report storage.

Follows the Repository pattern: services depend on the ``ReportStore``
protocol, never on SQLAlchemy, so unit tests can swap in an in-memory store.
Lookups are coroutines; the SQL implementation runs its blocking session work
in the Starlette threadpool.
"""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.db.session import session_scope
from app.models.report_models import MonthlyReportRecord
from app.models.schemas import MonthlyReport, ReturnResult

logger = logging.getLogger(__name__)


class ReportStore(Protocol):
    """Protocol defining the monthly report lookup capability."""

    async def get_monthly_report(self, isa_reference_number: str, tax_year: str, month: str) -> MonthlyReport | None:
        """Return the full report, or None when nothing is stored for the key."""
        ...


class SqlReportStore:
    """Report store backed by the ``monthly_report`` table."""

    async def get_monthly_report(self, isa_reference_number: str, tax_year: str, month: str) -> MonthlyReport | None:
        return await run_in_threadpool(self._get, isa_reference_number, tax_year, month)

    async def insert_report(self, report: MonthlyReport) -> None:
        await run_in_threadpool(self._upsert, report)

    async def delete_report(self, isa_reference_number: str, tax_year: str, month: str) -> bool:
        return await run_in_threadpool(self._delete, isa_reference_number, tax_year, month)

    @staticmethod
    def _find(db: Session, isa_reference_number: str, tax_year: str, month: str) -> MonthlyReportRecord | None:
        return db.scalar(
            select(MonthlyReportRecord).where(
                MonthlyReportRecord.isa_manager_reference_number == isa_reference_number,
                MonthlyReportRecord.year == tax_year,
                MonthlyReportRecord.month == month,
            )
        )

    def _get(self, isa_reference_number: str, tax_year: str, month: str) -> MonthlyReport | None:
        with session_scope() as db:
            record = self._find(db, isa_reference_number, tax_year, month)
            if record is None:
                return None
            return MonthlyReport(
                isa_manager_reference_number=record.isa_manager_reference_number,
                year=record.year,
                month=record.month,
                return_results=[ReturnResult.model_validate(item) for item in record.return_results or []],
            )

    def _upsert(self, report: MonthlyReport) -> None:
        payload = [result.model_dump(by_alias=True) for result in report.return_results]
        with session_scope() as db:
            record = self._find(db, report.isa_manager_reference_number, report.year, report.month)
            if record is None:
                record = MonthlyReportRecord(
                    isa_manager_reference_number=report.isa_manager_reference_number,
                    year=report.year,
                    month=report.month,
                )
                db.add(record)
            record.return_results = payload
        logger.info(
            "Stored monthly report for IM ref: [%s] for [%s][%s] with %d results",
            report.isa_manager_reference_number,
            report.month,
            report.year,
            len(payload),
        )

    def _delete(self, isa_reference_number: str, tax_year: str, month: str) -> bool:
        with session_scope() as db:
            record = self._find(db, isa_reference_number, tax_year, month)
            if record is None:
                return False
            db.delete(record)
        return True

"""Persisted monthly reports.

One row per (ISA manager reference number, tax year, month). Return results are
kept as a JSON array in their wire shape; the stub never queries inside them.
"""
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String, UniqueConstraint

from app.db.base_class import Base


class MonthlyReportRecord(Base):
    __tablename__ = "monthly_report"
    __table_args__ = (
        UniqueConstraint("isa_manager_reference_number", "year", "month", name="uq_monthly_report_ref_year_month"),
    )

    id = Column(Integer, primary_key=True, index=True)
    isa_manager_reference_number = Column(String(20), nullable=False, index=True)
    year = Column(String(7), nullable=False)  # e.g. 2025-26
    month = Column(String(3), nullable=False)  # e.g. APR
    return_results = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

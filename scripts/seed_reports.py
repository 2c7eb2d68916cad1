#!/usr/bin/env python3
"""Load monthly reports from a JSON file into the configured database.

The file holds a list of reports in wire format:

    [{"isaManagerReferenceNumber": "Z1234", "year": "2025-26", "month": "APR",
      "returnResults": [...]}]
"""
from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from app.db import session as db_session
from app.db.base_class import Base
from app.models import report_models  # noqa: F401
from app.models.schemas import MonthlyReport
from app.services.report_store import SqlReportStore


async def seed(path: Path) -> int:
    reports = [MonthlyReport.model_validate(item) for item in json.loads(path.read_text(encoding="utf-8"))]
    store = SqlReportStore()
    for report in reports:
        await store.insert_report(report)
    return len(reports)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("path", type=Path, help="JSON file with a list of monthly reports")
    args = parser.parse_args()

    Base.metadata.create_all(bind=db_session.engine)
    count = asyncio.run(seed(args.path))
    print(f"Seeded {count} monthly report(s) from {args.path}")


if __name__ == "__main__":
    main()

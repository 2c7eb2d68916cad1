import asyncio
import json
import logging

import pytest

from app.core.exceptions import (
    BadRequestError,
    InternalServerError,
    PageNotFoundError,
    ReportNotFoundError,
    ServiceUnavailableError,
)
from app.services.nps_service import NpsService
from tests.factories import MONTH, TAX_YEAR, FailingReportStore, InMemoryReportStore, make_report


def _audit_events(path):
    if not path.exists():
        return []
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


@pytest.mark.parametrize("reference", ["Z1234", "Z1500", "A0001"])
def test_submit_succeeds_for_unreserved_references(reference, audit_log):
    store = InMemoryReportStore()

    NpsService(store).submit_monthly_return(reference)

    events = _audit_events(audit_log)
    assert events[-1]["action"] == "nps.submit"
    assert events[-1]["isa_reference_number"] == reference
    assert events[-1]["status"] == "success"
    assert store.lookups == []


def test_submit_reserved_references(audit_log):
    store = InMemoryReportStore()
    service = NpsService(store)

    with pytest.raises(BadRequestError):
        service.submit_monthly_return("Z1400")
    with pytest.raises(ServiceUnavailableError):
        service.submit_monthly_return("Z1503")

    events = _audit_events(audit_log)
    assert [e["error"] for e in events] == ["BAD_REQUEST", "SERVICE_UNAVAILABLE"]
    assert all(e["status"] == "failure" for e in events)
    assert store.lookups == []


def test_submit_is_idempotent():
    service = NpsService(InMemoryReportStore())

    assert service.submit_monthly_return("Z1234") is None
    assert service.submit_monthly_return("Z1234") is None


def test_declaration(audit_log):
    service = NpsService(InMemoryReportStore())

    service.send_declaration("Z1400")
    with pytest.raises(InternalServerError) as excinfo:
        service.send_declaration("Z1500")

    assert excinfo.value.message == "Internal issue, try again later"
    events = _audit_events(audit_log)
    assert events[0]["action"] == "nps.declaration"
    assert events[0]["status"] == "success"
    assert events[1]["status"] == "failure"


def test_fetch_returns_requested_page():
    store = InMemoryReportStore([make_report(3)])
    service = NpsService(store)

    page = asyncio.run(service.get_monthly_report("Z1234", TAX_YEAR, MONTH, 1, 2))

    assert page.total_records == 3
    assert [r.account_number for r in page.return_results] == ["100000003"]
    assert store.lookups == [("Z1234", TAX_YEAR, MONTH)]


def test_fetch_z1500_never_touches_the_store():
    store = InMemoryReportStore([make_report(3, isa_reference_number="Z1500")])
    service = NpsService(store)

    with pytest.raises(InternalServerError) as excinfo:
        asyncio.run(service.get_monthly_report("Z1500", TAX_YEAR, MONTH, 0, 10))

    assert excinfo.value.message == "Internal issue, try again later"
    assert store.lookups == []


def test_fetch_z1500_rejection_is_logged(caplog):
    service = NpsService(InMemoryReportStore())

    with caplog.at_level(logging.WARNING, logger="app.services.nps_service"):
        with pytest.raises(InternalServerError):
            asyncio.run(service.get_monthly_report("Z1500", TAX_YEAR, MONTH, 0, 10))

    messages = [r.getMessage() for r in caplog.records if r.name == "app.services.nps_service"]
    assert any("Z1500" in m and MONTH in m and TAX_YEAR in m and "INTERNAL_SERVER_ERROR" in m for m in messages)


def test_fetch_missing_report():
    service = NpsService(InMemoryReportStore())

    with pytest.raises(ReportNotFoundError) as excinfo:
        asyncio.run(service.get_monthly_report("Z1234", TAX_YEAR, MONTH, 0, 10))

    assert excinfo.value.to_dict() == {"code": "REPORT_NOT_FOUND", "message": "Report not found"}


def test_fetch_page_past_the_end():
    service = NpsService(InMemoryReportStore([make_report(3)]))

    with pytest.raises(PageNotFoundError) as excinfo:
        asyncio.run(service.get_monthly_report("Z1234", TAX_YEAR, MONTH, 2, 2))

    assert excinfo.value.to_dict() == {"code": "PAGE_NOT_FOUND", "message": "No page 2 found"}


def test_store_failure_becomes_internal_error_without_retry():
    store = FailingReportStore(RuntimeError("connection refused"))
    service = NpsService(store)

    with pytest.raises(InternalServerError) as excinfo:
        asyncio.run(service.get_monthly_report("Z1234", TAX_YEAR, MONTH, 0, 10))

    assert excinfo.value.message == "Failed with exception: connection refused"
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert len(store.lookups) == 1


def test_repeated_fetches_are_identical():
    service = NpsService(InMemoryReportStore([make_report(5)]))

    first = asyncio.run(service.get_monthly_report("Z1234", TAX_YEAR, MONTH, 1, 2))
    second = asyncio.run(service.get_monthly_report("Z1234", TAX_YEAR, MONTH, 1, 2))

    assert first == second


def test_concurrent_fetches_are_independent():
    service = NpsService(InMemoryReportStore([make_report(5)]))

    async def fetch_all():
        return await asyncio.gather(*(service.get_monthly_report("Z1234", TAX_YEAR, MONTH, s, 2) for s in range(3)))

    pages = asyncio.run(fetch_all())

    assert [len(p.return_results) for p in pages] == [2, 2, 1]
    assert {p.total_records for p in pages} == {5}

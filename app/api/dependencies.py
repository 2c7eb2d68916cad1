"""Common dependencies for the NPS routes."""
from typing import Annotated, TypeAlias

from fastapi import Depends, Header

from app.core.exceptions import MissingBearerTokenError
from app.services.nps_service import NpsService
from app.services.report_store import ReportStore, SqlReportStore


def get_report_store() -> SqlReportStore:
    return SqlReportStore()


ReportStoreDep: TypeAlias = Annotated[SqlReportStore, Depends(get_report_store)]


def get_nps_service(store: Annotated[ReportStore, Depends(get_report_store)]) -> NpsService:
    return NpsService(store)


NpsServiceDep: TypeAlias = Annotated[NpsService, Depends(get_nps_service)]


def require_bearer_token(authorization: Annotated[str | None, Header()] = None) -> str:
    """Reject requests without an ``Authorization: Bearer ...`` header.

    The stub does not verify the token itself, only that one was sent.
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise MissingBearerTokenError()
    return authorization.split(" ", 1)[1]

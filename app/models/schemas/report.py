"""Monthly report schemas.

Field names are snake_case in Python and camelCase on the wire, matching the
JSON the real NPS service exchanges.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NpsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class IssueIdentifiedMessage(NpsModel):
    code: str
    message: str


class ReturnResult(NpsModel):
    account_number: str
    nino: str
    issue_identified: IssueIdentifiedMessage


class MonthlyReport(NpsModel):
    """Full set of return results for one ISA manager, tax year and month."""

    isa_manager_reference_number: str
    year: str
    month: str
    return_results: list[ReturnResult] = Field(default_factory=list)


class ReturnResultResponse(NpsModel):
    # Always the size of the whole report, not of the returned page
    total_records: int
    return_results: list[ReturnResult]


class MonthlyReportIn(NpsModel):
    return_results: list[ReturnResult] = Field(default_factory=list)


class ErrorResponse(NpsModel):
    code: str
    message: str

"""NPS submission, declaration and monthly report endpoints."""
from fastapi import APIRouter, Depends, Query, Response

from app.api.dependencies import NpsServiceDep, require_bearer_token
from app.models.schemas import ErrorResponse, ReturnResultResponse

router = APIRouter(tags=["nps"])


@router.post(
    "/nps/submit/{isa_reference_number}",
    status_code=204,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    dependencies=[Depends(require_bearer_token)],
)
def submit_monthly_return(
    isa_reference_number: str,
    service: NpsServiceDep,
) -> Response:
    # The body is never read; NPS content rules are not simulated
    service.submit_monthly_return(isa_reference_number)
    return Response(status_code=204)


@router.post(
    "/nps/declaration/{isa_reference_number}",
    status_code=204,
    responses={500: {"model": ErrorResponse}},
)
def send_declaration(isa_reference_number: str, service: NpsServiceDep) -> Response:
    service.send_declaration(isa_reference_number)
    return Response(status_code=204)


@router.get(
    "/monthly/{isa_reference_number}/{tax_year}/{month}/results",
    response_model=ReturnResultResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_monthly_report(
    isa_reference_number: str,
    tax_year: str,
    month: str,
    service: NpsServiceDep,
    skip: int = Query(..., ge=0, description="Zero-based page index"),
    take: int = Query(..., ge=0, description="Page size"),
) -> ReturnResultResponse:
    return await service.get_monthly_report(isa_reference_number, tax_year, month, skip, take)

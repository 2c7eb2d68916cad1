import logging
import uuid
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import INTERNAL_ISSUE_MESSAGE, BadRequestError, NpsStubException

logger = logging.getLogger("app.errors")


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return BadRequestError().message
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"Invalid {location}: {first.get('msg', 'invalid value')}"


def register_error_handlers(app):
    @app.exception_handler(NpsStubException)
    async def nps_stub_exception(request: Request, exc: NpsStubException):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        error = BadRequestError()
        error.message = _describe_validation_error(exc)
        logger.warning("Rejected request path=%s method=%s: %s", request.url.path, request.method, error.message)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):  # noqa: BLE001
        correlation_id = uuid.uuid4().hex
        logger.exception("Unhandled error cid=%s path=%s method=%s", correlation_id, request.url.path, request.method)
        return JSONResponse(
            status_code=500,
            content={"code": "INTERNAL_SERVER_ERROR", "message": INTERNAL_ISSUE_MESSAGE, "cid": correlation_id},
        )

    return app

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp
import logging

from app.api.routes_health import router as health_router
from app.api.routes_metrics import router as metrics_router
from app.api.routes_nps import router as nps_router
from app.api.routes_test_support import router as test_support_router
from app.core.config import settings
from app.core.errors import register_error_handlers
from app.core.logger import init_logging
from app.core.monitoring import init_monitoring
from app.db import session as db_session
from app.db.base_class import Base
from app.models import report_models  # noqa: F401  registers tables on Base.metadata


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, max_body: int = 12 * 1024 * 1024) -> None:
        super().__init__(app)
        self.max_body = max_body
        self.logger = logging.getLogger("app.request_size")

    async def dispatch(self, request, call_next):  # type: ignore[override]
        # Check Content-Length header early if provided
        length_header = request.headers.get("content-length")
        if length_header:
            try:
                if int(length_header) > self.max_body:
                    self.logger.warning("Rejected body of %s bytes on %s", length_header, request.url.path)
                    return JSONResponse(
                        status_code=413,
                        content={"code": "REQUEST_ENTITY_TOO_LARGE", "message": "Request body too large"},
                    )
            except ValueError:
                pass
        return await call_next(request)


def create_app() -> FastAPI:
    init_logging()
    init_monitoring()

    is_production = settings.ENV.lower() == "prod"
    app = FastAPI(
        title=settings.APP_NAME,
        debug=False,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )
    app.add_middleware(RequestSizeLimitMiddleware)
    register_error_handlers(app)
    app.include_router(nps_router)
    if settings.TEST_SUPPORT_ROUTES_ENABLED:
        app.include_router(test_support_router)
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(health_router)

    @app.on_event("startup")
    def create_tables():
        Base.metadata.create_all(bind=db_session.engine)

    return app


app = create_app()

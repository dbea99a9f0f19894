"""FastAPI application for the licensing requirements engine."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from common.licensing_engine.catalog import load_catalog
from common.licensing_engine.engine import MatchingEngine
from common.licensing_engine.errors import NotFoundError, ValidationError

from .requirements import router
from .settings import ApiSettings, get_api_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _error_body(error: str, details: str, **extra) -> dict:
    return {
        "success": False,
        "error": error,
        "details": details,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        **extra,
    }


def create_app(
    engine: Optional[MatchingEngine] = None,
    *,
    settings: Optional[ApiSettings] = None,
) -> FastAPI:
    settings = settings or get_api_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    app = FastAPI(
        title="Business Licensing Requirements API",
        version=settings.app_version,
    )
    # The catalog is loaded once per process and shared read-only by every request.
    app.state.engine = engine or MatchingEngine(load_catalog())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)

    @app.exception_handler(ValidationError)
    async def handle_validation(request: Request, exc: ValidationError):
        logger.warning("Validation failed on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=400,
            content=_error_body("Validation failed", str(exc), field=exc.field),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        # Missing or unparseable bodies get the same envelope as profile errors.
        first = exc.errors()[0] if exc.errors() else {}
        logger.warning("Request rejected on %s: %s", request.url.path, first.get("msg"))
        return JSONResponse(
            status_code=400,
            content=_error_body("Validation failed", first.get("msg", "Invalid request body"), field="businessProfile"),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.info("Requirement not found: %s", exc.requirement_id)
        return JSONResponse(status_code=404, content=_error_body("Requirement not found", str(exc)))

    @app.get("/health")
    def health():
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.app_version,
            "service": "Business Licensing API",
        }

    return app

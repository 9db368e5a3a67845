from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from salesboard.api.router import api_router
from salesboard.core.config import get_cors_origins, get_settings
from salesboard.core.errors import (
    AppError,
    app_error_handler,
    unhandled_error_handler,
    validation_error_handler,
)
from salesboard.core.logging import configure_logging

logger = logging.getLogger(__name__)


def _register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", "X-User-Id"],
    )
    app.include_router(api_router, prefix=settings.api_prefix)
    _register_exception_handlers(app)
    logger.info(
        "%s ready (environment=%s, reporting_timezone=%s)",
        settings.app_name,
        settings.environment,
        settings.reporting_timezone,
    )
    return app


app = create_app()

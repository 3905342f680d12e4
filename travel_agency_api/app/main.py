"""
Main entrypoint for the Travel Agency API.

This module assembles the FastAPI application, sets up logging,
attaches the database connection factory and includes the API router.
``create_app`` builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn travel_agency_api.app.main:app --reload

Service errors are translated into HTTP responses here and nowhere
else: each ``ErrorKind`` maps to one status code, and any other
exception becomes a 500.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import ConnectionFactory
from .core.errors import ErrorKind, InternalError, TravelAgencyError
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


def _internal_error_detail(app_settings: Settings, message: str) -> str:
    if app_settings.expose_error_details:
        return f"Internal server error: {message}"
    return "Internal server error"


def register_exception_handlers(app: FastAPI, app_settings: Settings) -> None:
    """Map service errors, request validation failures and stray exceptions to responses."""

    @app.exception_handler(TravelAgencyError)
    async def service_error_handler(request: Request, exc: TravelAgencyError) -> JSONResponse:
        if exc.kind is ErrorKind.INTERNAL:
            detail = _internal_error_detail(app_settings, exc.message)
        else:
            detail = exc.message
        return JSONResponse(status_code=exc.status_code, content={"detail": detail})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": _internal_error_detail(app_settings, str(exc))},
        )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the ones read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or default_settings

    # Initialise logging before anything else so that the setup below
    # can log.
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
    )
    app.state.settings = app_settings
    app.state.connections = ConnectionFactory(
        app_settings.database_url, timeout=app_settings.database_timeout
    )

    app.include_router(api_router, prefix=app_settings.api_prefix)
    register_exception_handlers(app, app_settings)

    @app.get("/health", tags=["health"])
    async def health() -> JSONResponse:
        """Report whether the database answers a trivial query."""
        try:
            app.state.connections.ping()
        except InternalError as exc:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unavailable", "detail": _internal_error_detail(app_settings, exc.message)},
            )
        return JSONResponse(
            content={
                "status": "ok",
                "project": app_settings.project_name,
                "version": app_settings.api_version,
            }
        )

    @app.on_event("startup")
    async def startup_event() -> None:
        if app_settings.create_schema:
            app.state.connections.create_schema()
        logger.info("%s %s ready", app_settings.project_name, app_settings.api_version)

    return app


# Create the application instance at import time so that ASGI servers
# can reference ``travel_agency_api.app.main:app`` directly.
app = create_app()

"""FastAPI application."""

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from elevate.config import Settings, check_production_settings
from elevate.domain.error import DomainError
from elevate.interface.api.identity import SERVICE_KEY_HEADER
from elevate.interface.api.routes import admin_tokens, elevation, health, principals
from elevate.interface.error import status_code_for
from elevate.util.di.container import create_container, setup_di
from elevate.util.observability import instrument_fastapi


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as {"error": code, "detail": message}."""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logfire.error(
            "Request failed with consistency error",
            path=request.url.path,
            error=exc.code,
            detail=str(exc),
        )
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "detail": str(exc)},
    )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function. In
    production start_app.py handles this; in tests conftest.py does.

    Args:
        container: DI container; the production container when omitted
    """
    settings = Settings()
    check_production_settings(settings)

    app_instance = FastAPI(
        title="Elevate API",
        description="Admin elevation: email-bound registration tokens and the admin flag guard",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            SERVICE_KEY_HEADER,
        ],
        max_age=600,
    )

    setup_di(app_instance, container if container is not None else create_container())

    app_instance.add_exception_handler(DomainError, domain_error_handler)

    app_instance.include_router(health.router)
    app_instance.include_router(admin_tokens.router)
    app_instance.include_router(elevation.router)
    app_instance.include_router(principals.router)

    return app_instance

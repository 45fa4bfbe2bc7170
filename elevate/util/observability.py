"""Observability configuration using Logfire.

Every domain operation opens a span and emits structured events:

    with logfire.span("admin_token_service.consume", consumed_by=str(pid)):
        logfire.warn("Consume of expired token", token=value.redacted())

Token values are only ever logged through TokenValue.redacted(). Request
spans record which kind of credential was presented, never its value.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from elevate.config import Settings

SERVICE_NAME = "elevate-backend"

# Attribute names logfire must always scrub, on top of its defaults
SCRUB_PATTERNS = ["service_key", "jwt_secret"]


def _should_send(settings: Settings) -> bool:
    """Explicit setting wins, otherwise send only when a token is configured."""
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the API process and the operator scripts.

    Set OBSERVABILITY__LOGFIRE_TOKEN to ship telemetry; override with
    OBSERVABILITY__SEND_TO_LOGFIRE.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        operator_http_enabled=bool(settings.auth.service_key),
    )


def _credential_kind(request) -> str:
    headers = getattr(request, "headers", None)
    if headers is not None and headers.get("x-service-key"):
        return "service_key"
    cookies = getattr(request, "cookies", None)
    if cookies and cookies.get("auth_token"):
        return "session"
    return "none"


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument the FastAPI app with Logfire request spans.

    Args:
        app: FastAPI application instance
    """

    def _request_attributes(request, attributes):
        return {
            **attributes,
            "path": request.url.path,
            "credential": _credential_kind(request),
        }

    logfire.instrument_fastapi(
        app,
        # Headers carry session tokens and the service key
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace statements issued through the async engine.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)

#!/usr/bin/env python3
"""Start the FastAPI application with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from elevate.config import Settings
from elevate.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire before the app factory instruments FastAPI
    configure_logfire(settings)

    try:
        logfire.info("Starting FastAPI application")

        uvicorn.run(
            "elevate.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""Start the API server, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from enroll.config import Settings
from enroll.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Configure before the app module is imported so import errors are traced
    configure_logfire(settings)

    try:
        logfire.info("Starting enroll API", host=settings.host, port=settings.port)
        uvicorn.run(
            "enroll.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
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

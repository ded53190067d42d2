"""Logfire setup.

Application code logs through ``logfire`` directly:

    import logfire

    logfire.info("Invite created", code=invite.code, remaining_uses=invite.remaining_uses)

    with logfire.span("provisioning.complete", code=code, username=username):
        ...

This module only configures the SDK and turns on library instrumentation.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from enroll.config import Settings

SERVICE_NAME = "enroll-api"


def _should_send(settings: Settings) -> bool:
    """An explicit switch wins; otherwise send only when a token is set."""
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure the Logfire SDK for this process.

    Set ``OBSERVABILITY__LOGFIRE_TOKEN`` to ship traces to Logfire; without a
    token everything stays on the console.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    options: dict[str, Any] = {
        "service_name": SERVICE_NAME,
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if settings.observability.logfire_token:
        options["token"] = settings.observability.logfire_token

    logfire.configure(**options)
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by ``app``.

    Admin keys travel in a header, so headers are not captured.
    """

    def _request_attributes(request, attributes):
        extra = {**attributes}
        if hasattr(request, "method"):
            extra["method"] = request.method
        if hasattr(request, "url"):
            extra["path"] = request.url.path
        return extra

    logfire.instrument_fastapi(app, request_attributes_mapper=_request_attributes)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace outbound calls to the media server, companion service and chat APIs."""
    logfire.instrument_httpx()

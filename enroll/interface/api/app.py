"""FastAPI application."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress
from datetime import datetime, timezone

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from enroll.application.usecase.invite import (
    SweepExpiredInvitesRequest,
    SweepExpiredInvitesUseCase,
)
from enroll.config import Settings
from enroll.interface.api.routes import (
    health,
    invite,
    invites,
    profiles,
    provision,
    users,
    verification,
)
from enroll.util.di.container import create_container, setup_di
from enroll.util.observability import instrument_fastapi, instrument_httpx


async def run_sweep(container: AsyncContainer) -> list[str]:
    """Run one housekeeping sweep in its own request scope."""
    async with container() as request_container:
        use_case = await request_container.get(SweepExpiredInvitesUseCase)
        response = await use_case.execute(
            SweepExpiredInvitesRequest(now=datetime.now(timezone.utc))
        )
    return response.deleted


async def sweep_forever(container: AsyncContainer, interval: float) -> None:
    """Sweep expired invites every ``interval`` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        try:
            await run_sweep(container)
        except Exception as e:
            # Next tick retries
            logfire.exception("Housekeeping sweep failed", error=str(e))


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire must be configured before this is called; ``scripts/start_app.py``
    does that in production.

    Args:
        container: DI container to serve requests from; the production
            container when omitted
    """
    settings = Settings()
    instrument_httpx()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        task = None
        if settings.housekeeping.enabled:
            task = asyncio.create_task(
                sweep_forever(
                    app.state.dishka_container, settings.housekeeping.interval_seconds
                )
            )
            logfire.info(
                "Housekeeping started", interval_seconds=settings.housekeeping.interval_seconds
            )
        yield
        if task is not None:
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
        await app.state.dishka_container.close()

    app_instance = FastAPI(
        title="Enroll API",
        description="Invite-gated account provisioning for a media server",
        version="0.1.0",
        lifespan=lifespan,
    )
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.api.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Admin-Key"],
        max_age=600,
    )

    if container is None:
        container = create_container()
    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(provision.router)
    app_instance.include_router(invite.router)
    app_instance.include_router(verification.router)
    app_instance.include_router(invites.router)
    app_instance.include_router(profiles.router)
    app_instance.include_router(users.router)

    return app_instance


# Logfire must be configured before this module is imported
app = create_app()

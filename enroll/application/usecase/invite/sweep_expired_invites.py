"""Sweep expired invites use case."""

from datetime import datetime, timezone

from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.service import HousekeepingService


class SweepExpiredInvitesRequest(BaseModel):
    now: datetime | None = None


class SweepExpiredInvitesResponse(BaseModel):
    deleted: list[str]


class SweepExpiredInvitesUseCase(BaseUseCase):
    """Use case for removing every expired invite."""

    def __init__(self, housekeeping_service: HousekeepingService) -> None:
        self.housekeeping_service = housekeeping_service

    async def execute(
        self, request: SweepExpiredInvitesRequest
    ) -> SweepExpiredInvitesResponse:
        now = request.now or datetime.now(timezone.utc)
        deleted = await self.housekeeping_service.sweep(now)
        return SweepExpiredInvitesResponse(deleted=list(deleted))

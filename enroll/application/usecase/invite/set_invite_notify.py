"""Set invite notification preferences use case."""

from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.config import Settings
from enroll.domain.service import InviteService
from enroll.domain.value import InviteCode


class InviteNotifyChange(BaseModel):
    """Switches to change on one invite; None leaves a switch alone."""

    notify_expiry: bool | None = None
    notify_creation: bool | None = None


class SetInviteNotifyRequest(BaseModel):
    """Notification preference changes keyed by invite code."""

    changes: dict[str, InviteNotifyChange]
    address: str | None = None


class SetInviteNotifyUseCase(BaseUseCase):
    """Use case for subscribing an admin to invite expiry/creation messages."""

    def __init__(self, invite_service: InviteService, settings: Settings) -> None:
        self.invite_service = invite_service
        self.settings = settings

    async def execute(self, request: SetInviteNotifyRequest) -> None:
        """Raises NotFoundError if any invite does not exist."""
        address = request.address or self.settings.admin.email
        if not address:
            raise ValueError("No admin address to notify")
        for code, change in request.changes.items():
            await self.invite_service.set_notify(
                InviteCode(code),
                address,
                notify_expiry=change.notify_expiry,
                notify_creation=change.notify_creation,
            )

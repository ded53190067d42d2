"""List invites use case."""

from datetime import datetime, timezone

import logfire
from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.application.usecase.invite.create_invite import InviteItem
from enroll.config import Settings
from enroll.domain.service import (
    HousekeepingService,
    InviteService,
    MessageService,
    ProfileService,
)


class ListInvitesRequest(BaseModel):
    """List invites request.

    ``admin`` selects whose notify preferences are shown; it defaults to the
    configured admin address.
    """

    admin: str | None = None


class ListInvitesResponse(BaseModel):
    """Every live invite plus the profile names usable for new ones."""

    invites: list[InviteItem]
    profiles: list[str]


class ListInvitesUseCase(BaseUseCase):
    """Use case for the admin invite overview. Sweeps expired invites first."""

    def __init__(
        self,
        invite_service: InviteService,
        housekeeping_service: HousekeepingService,
        profile_service: ProfileService,
        message_service: MessageService,
        settings: Settings,
    ) -> None:
        self.invite_service = invite_service
        self.housekeeping_service = housekeeping_service
        self.profile_service = profile_service
        self.message_service = message_service
        self.settings = settings

    async def execute(self, request: ListInvitesRequest) -> ListInvitesResponse:
        with logfire.span("list_invites.execute"):
            await self.housekeeping_service.sweep(datetime.now(timezone.utc))

            admin = request.admin if request.admin is not None else self.settings.admin.email
            invites = await self.invite_service.list_invites()
            profiles = await self.profile_service.list_profiles()

            return ListInvitesResponse(
                invites=[
                    InviteItem.from_invite(
                        invite, self.message_service.invite_link(invite.code), admin
                    )
                    for invite in invites
                ],
                profiles=[profile.name for profile in profiles],
            )

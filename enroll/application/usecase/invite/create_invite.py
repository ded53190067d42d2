"""Create invite use case."""

from datetime import datetime, timezone

import logfire
from pydantic import BaseModel, Field, model_validator

from enroll.application.usecase.base import BaseUseCase
from enroll.config import Settings
from enroll.domain.error import ExternalServiceError
from enroll.domain.model.invite import Invite
from enroll.domain.service import (
    DiscordClient,
    InviteService,
    MessageService,
    NotificationService,
)
from enroll.domain.value import DurationOffset, InviteCode


class CreateInviteRequest(BaseModel):
    """Request to generate an invite."""

    valid_for: DurationOffset = DurationOffset(days=1)
    uses: int = Field(default=1, ge=1)
    no_limit: bool = False
    label: str = ""
    profile: str = ""
    user_expiry: DurationOffset | None = None
    send_to: str = ""
    code: str | None = None

    @model_validator(mode="after")
    def check_validity(self) -> "CreateInviteRequest":
        if self.valid_for.is_zero:
            raise ValueError("Invite validity must be positive")
        return self


class InviteItem(BaseModel):
    """Invite as shown to administrators."""

    code: str
    url: str
    label: str
    created: datetime
    valid_till: datetime
    remaining_uses: int
    no_limit: bool
    profile: str
    user_expiry: DurationOffset | None
    used_by: list[tuple[str, datetime]]
    send_to: str
    notify_expiry: bool = False
    notify_creation: bool = False

    @classmethod
    def from_invite(cls, invite: Invite, url: str, admin: str = "") -> "InviteItem":
        preference = invite.notify.get(admin) if admin else None
        return cls(
            code=invite.code,
            url=url,
            label=invite.label,
            created=invite.created,
            valid_till=invite.valid_till,
            remaining_uses=invite.remaining_uses,
            no_limit=invite.no_limit,
            profile=invite.profile,
            user_expiry=invite.user_expiry,
            used_by=[(r.identity, r.used_at) for r in invite.used_by],
            send_to=invite.send_to,
            notify_expiry=preference.notify_expiry if preference else False,
            notify_creation=preference.notify_creation if preference else False,
        )


class CreateInviteUseCase(BaseUseCase):
    """Use case for generating an invite and optionally sending it."""

    def __init__(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
        message_service: MessageService,
        discord_client: DiscordClient,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
            notification_service: Delivers invites sent by email
            message_service: Renders the invite message
            discord_client: Looks up and DMs Discord recipients
            settings: Application settings
        """
        self.invite_service = invite_service
        self.notification_service = notification_service
        self.message_service = message_service
        self.discord_client = discord_client
        self.settings = settings

    async def execute(self, request: CreateInviteRequest) -> InviteItem:
        """Create the invite.

        Raises:
            DuplicateCodeError: If an explicit code is already taken
        """
        now = datetime.now(timezone.utc)
        invite = await self.invite_service.create_invite(
            now=now,
            valid_for=request.valid_for,
            uses=None if request.no_limit else request.uses,
            label=request.label,
            profile=request.profile,
            user_expiry=request.user_expiry,
            code=InviteCode(request.code) if request.code else None,
        )

        if request.send_to and self.settings.messages.invites:
            outcome = await self._send(invite, request.send_to)
            invite = await self.invite_service.set_send_to(invite.code, outcome) or invite

        return InviteItem.from_invite(invite, self.message_service.invite_link(invite.code))

    async def _send(self, invite: Invite, send_to: str) -> str:
        """Send the invite link; returns what to record in ``send_to``."""
        message = self.message_service.invite(invite)

        if "@" in send_to:
            report = await self.notification_service.send_to_address(message, send_to)
            if not report.ok:
                logfire.error("Failed to send invite email", code=invite.code, address=send_to)
                return f"Failed to send to {send_to}"
            return send_to

        if not self.settings.discord.enabled:
            return f"Failed: {send_to} is not an email address"
        try:
            users = await self.discord_client.find_users(send_to)
            if len(users) != 1:
                return f"Failed: {len(users)} Discord users matched {send_to}"
            channel = await self.discord_client.open_dm(users[0].user_id)
            await self.discord_client.send_message(message, channel)
        except ExternalServiceError as e:
            logfire.error("Failed to send invite via Discord", code=invite.code, error=str(e))
            return f"Failed to send to {send_to}"
        return f"{send_to} (Discord)"

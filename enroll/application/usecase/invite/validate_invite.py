"""Validate invite use case."""

from datetime import datetime, timezone

import logfire
from pydantic import BaseModel, Field

from enroll.application.usecase.base import BaseUseCase
from enroll.config import Settings
from enroll.domain.service import HousekeepingService, Verifier
from enroll.domain.value import VERIFICATION_ORDER, InviteCode, Platform


class ValidateInviteRequest(BaseModel):
    """Validate invite request."""

    code: str


class PlatformRequirement(BaseModel):
    enabled: bool
    required: bool


class ValidateInviteResponse(BaseModel):
    """What the signup form needs to know about an invite."""

    valid: bool
    valid_till: datetime | None = None
    email_required: bool = False
    email_confirmation: bool = False
    platforms: dict[Platform, PlatformRequirement] = Field(default_factory=dict)


class ValidateInviteUseCase(BaseUseCase):
    """Use case for checking an invite code before showing the signup form.

    Expired invites are retired as a side effect.
    """

    def __init__(
        self,
        housekeeping_service: HousekeepingService,
        verifiers: dict[Platform, Verifier],
        settings: Settings,
    ) -> None:
        self.housekeeping_service = housekeeping_service
        self.verifiers = verifiers
        self.settings = settings

    async def execute(self, request: ValidateInviteRequest) -> ValidateInviteResponse:
        invite = await self.housekeeping_service.check_invite(
            InviteCode(request.code), datetime.now(timezone.utc)
        )
        if invite is None:
            logfire.info("Invite not found", code=request.code)
            return ValidateInviteResponse(valid=False)

        return ValidateInviteResponse(
            valid=True,
            valid_till=invite.valid_till,
            email_required=self.settings.email.required,
            email_confirmation=self.settings.email_confirmation.enabled,
            platforms={
                platform: PlatformRequirement(
                    enabled=self.verifiers[platform].enabled,
                    required=self.verifiers[platform].required,
                )
                for platform in VERIFICATION_ORDER
                if platform in self.verifiers
            },
        )

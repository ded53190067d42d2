"""Issue verification PIN use case."""

from datetime import datetime, timezone

import logfire
from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.error import ExternalServiceError, InvalidCodeError, NotFoundError
from enroll.domain.service import HousekeepingService, Verifier
from enroll.domain.value import InviteCode, Platform


class IssuePINRequest(BaseModel):
    """Request a PIN for an invite's signup form.

    ``user_id`` is the Matrix user id to send the PIN to; other platforms
    ignore it.
    """

    code: str
    platform: Platform
    user_id: str = ""


class IssuePINResponse(BaseModel):
    """PIN to show the user, or ``sent`` when it was delivered directly."""

    pin: str | None = None
    bot_username: str = ""
    sent: bool = False


class IssuePINUseCase(BaseUseCase):
    """Use case for issuing a verification PIN against a live invite."""

    def __init__(
        self,
        housekeeping_service: HousekeepingService,
        verifiers: dict[Platform, Verifier],
    ) -> None:
        self.housekeeping_service = housekeeping_service
        self.verifiers = verifiers

    async def execute(self, request: IssuePINRequest) -> IssuePINResponse:
        """Issue a PIN.

        Raises:
            InvalidCodeError: If the invite cannot be redeemed
            NotFoundError: If the platform is disabled
            ExternalServiceError: If a Matrix PIN cannot be delivered
        """
        invite = await self.housekeeping_service.check_invite(
            InviteCode(request.code), datetime.now(timezone.utc)
        )
        if invite is None:
            raise InvalidCodeError(request.code)

        verifier = self.verifiers.get(request.platform)
        if verifier is None or not verifier.enabled:
            raise NotFoundError("Platform", request.platform.value)

        if request.platform == Platform.MATRIX:
            if not request.user_id:
                raise ValueError("A Matrix user id is required")
            try:
                await verifier.issue_token(request.user_id)
            except ExternalServiceError as e:
                logfire.error("Failed to send Matrix PIN", user_id=request.user_id, error=str(e))
                raise
            return IssuePINResponse(sent=True)

        pin = await verifier.issue_token(invite.code)
        return IssuePINResponse(
            pin=pin, bot_username=getattr(verifier.settings, "bot_username", "")
        )

"""Check verification use case."""

from datetime import datetime, timezone

import logfire
from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.error import InvalidCodeError, NotFoundError
from enroll.domain.service import HousekeepingService, MatrixVerifier, Verifier
from enroll.domain.value import InviteCode, Platform, VerificationPIN


class CheckVerificationRequest(BaseModel):
    """Poll whether a PIN has been verified.

    For Matrix, supplying ``user_id`` confirms the PIN the user typed in.
    """

    code: str
    platform: Platform
    pin: str
    user_id: str = ""


class CheckVerificationResponse(BaseModel):
    verified: bool
    display_name: str = ""


class CheckVerificationUseCase(BaseUseCase):
    """Use case for checking a PIN without consuming it.

    Only callers holding a live invite may poll or confirm PINs.
    """

    def __init__(
        self,
        housekeeping_service: HousekeepingService,
        verifiers: dict[Platform, Verifier],
    ) -> None:
        self.housekeeping_service = housekeeping_service
        self.verifiers = verifiers

    async def execute(self, request: CheckVerificationRequest) -> CheckVerificationResponse:
        """Check a PIN.

        Raises:
            InvalidCodeError: If the invite cannot be redeemed
            NotFoundError: If the platform is disabled
        """
        invite = await self.housekeeping_service.check_invite(
            InviteCode(request.code), datetime.now(timezone.utc)
        )
        if invite is None:
            logfire.info("PIN check against invalid invite", code=request.code)
            raise InvalidCodeError(request.code)

        verifier = self.verifiers.get(request.platform)
        if verifier is None or not verifier.enabled:
            raise NotFoundError("Platform", request.platform.value)

        pin = VerificationPIN(request.pin)
        if isinstance(verifier, MatrixVerifier) and request.user_id:
            await verifier.confirm(pin, request.user_id)

        identity = await verifier.check_verified(pin)
        if identity is None:
            return CheckVerificationResponse(verified=False)
        return CheckVerificationResponse(verified=True, display_name=identity.display_name)

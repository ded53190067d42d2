"""Link identity use case."""

import logfire
from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.error import ExternalServiceError, NotFoundError
from enroll.domain.model import LinkedIdentity
from enroll.domain.service import AccountService, Verifier
from enroll.domain.value import AccountId, Platform, VerificationPIN


class LinkIdentityRequest(BaseModel):
    """Link a verified PIN's identity to an existing account."""

    account_id: str
    platform: Platform
    pin: str
    contact: bool = True


class LinkIdentityUseCase(BaseUseCase):
    """Use case for consuming a verification outside provisioning."""

    def __init__(
        self,
        account_service: AccountService,
        verifiers: dict[Platform, Verifier],
    ) -> None:
        self.account_service = account_service
        self.verifiers = verifiers

    async def execute(self, request: LinkIdentityRequest) -> LinkedIdentity:
        """Consume the PIN and store the link.

        Raises:
            NotFoundError: If the platform is disabled or the PIN is not
                (or no longer) verified
        """
        verifier = self.verifiers.get(request.platform)
        if verifier is None or not verifier.enabled:
            raise NotFoundError("Platform", request.platform.value)

        identity = await verifier.consume(VerificationPIN(request.pin))
        if identity is None:
            raise NotFoundError("Verified PIN", request.pin)

        try:
            identity = await verifier.after_link(identity)
        except ExternalServiceError as e:
            logfire.error(
                "Platform action failed", platform=request.platform.value, error=str(e)
            )

        return await self.account_service.link_identity(
            AccountId(request.account_id), identity, contact=request.contact
        )

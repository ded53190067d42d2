"""Resume provisioning use case."""

from datetime import datetime, timezone

import logfire
from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.application.usecase.provisioning.workflow import (
    ProvisioningResponse,
    ProvisioningWorkflow,
    rejected,
)
from enroll.domain.error import (
    ConfirmationRejectedError,
    InvalidConfirmationTokenError,
    ProvisioningRejected,
)
from enroll.domain.service import ConfirmationService


class ResumeProvisioningRequest(BaseModel):
    """Request carrying a confirmation token from a mailed link."""

    token: str


class ResumeProvisioningUseCase(BaseUseCase):
    """Use case for finishing a provisioning run after email confirmation.

    The registration comes from the token, not from the live request. Each
    token is accepted once: it must still be on the invite's key list, and
    consuming the invite removes it.
    """

    def __init__(
        self,
        workflow: ProvisioningWorkflow,
        confirmation_service: ConfirmationService,
    ) -> None:
        self.workflow = workflow
        self.confirmation_service = confirmation_service

    async def execute(self, request: ResumeProvisioningRequest) -> ProvisioningResponse:
        now = datetime.now(timezone.utc)

        with logfire.span("resume_provisioning.execute"):
            try:
                try:
                    registration = self.confirmation_service.verify(request.token)
                except InvalidConfirmationTokenError as e:
                    raise ConfirmationRejectedError(f"Invalid confirmation link: {e}")

                context = await self.workflow.validate(registration, now)
                if request.token not in context.invite.keys:
                    logfire.warn(
                        "Confirmation token not issued for invite or already used",
                        code=registration.code,
                    )
                    raise ConfirmationRejectedError("Confirmation link already used")

                return await self.workflow.complete(context, now, key=request.token)
            except ProvisioningRejected as e:
                logfire.info("Provisioning rejected", reason=e.reason.value)
                return rejected(e)

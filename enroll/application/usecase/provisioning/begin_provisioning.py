"""Begin provisioning use case."""

from datetime import datetime, timezone

import logfire
from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.application.usecase.provisioning.workflow import (
    ProvisioningResponse,
    ProvisioningWorkflow,
    rejected,
)
from enroll.config import Settings
from enroll.domain.error import (
    ConfirmationFailedError,
    EmailRequiredError,
    InvalidCodeError,
    ProvisioningRejected,
)
from enroll.domain.service import (
    ConfirmationService,
    InviteService,
    MessageService,
    NotificationService,
)
from enroll.domain.value import Platform, ProvisioningStatus, Registration


class BeginProvisioningRequest(BaseModel):
    """Request to redeem an invite."""

    code: str
    username: str
    password: str
    email: str = ""
    discord_pin: str = ""
    matrix_pin: str = ""
    telegram_pin: str = ""
    discord_contact: bool = True
    matrix_contact: bool = True
    telegram_contact: bool = True

    def to_registration(self) -> Registration:
        return Registration(
            code=self.code,
            username=self.username,
            password=self.password,
            email=self.email,
            pins={
                platform: pin
                for platform, pin in (
                    (Platform.DISCORD, self.discord_pin),
                    (Platform.MATRIX, self.matrix_pin),
                    (Platform.TELEGRAM, self.telegram_pin),
                )
                if pin
            },
            contact={
                Platform.DISCORD: self.discord_contact,
                Platform.MATRIX: self.matrix_contact,
                Platform.TELEGRAM: self.telegram_contact,
            },
        )


class BeginProvisioningUseCase(BaseUseCase):
    """Use case for a first provisioning submission.

    Either creates the account straight away or, with email confirmation
    enabled, mails a confirmation link and stops.
    """

    def __init__(
        self,
        workflow: ProvisioningWorkflow,
        confirmation_service: ConfirmationService,
        invite_service: InviteService,
        notification_service: NotificationService,
        message_service: MessageService,
        settings: Settings,
    ) -> None:
        """Initialize begin provisioning use case.

        Args:
            workflow: Shared provisioning steps
            confirmation_service: Confirmation token issuer
            invite_service: Invite domain service (records issued tokens)
            notification_service: Sends the confirmation link
            message_service: Renders the confirmation message
            settings: Application settings
        """
        self.workflow = workflow
        self.confirmation_service = confirmation_service
        self.invite_service = invite_service
        self.notification_service = notification_service
        self.message_service = message_service
        self.settings = settings

    async def execute(self, request: BeginProvisioningRequest) -> ProvisioningResponse:
        """Validate a submission and provision or suspend.

        Args:
            request: Invite code, credentials and PINs

        Returns:
            Created, ConfirmationPending or Rejected
        """
        registration = request.to_registration()
        now = datetime.now(timezone.utc)

        with logfire.span(
            "begin_provisioning.execute",
            code=request.code,
            username=request.username,
        ):
            try:
                context = await self.workflow.validate(registration, now)
                if self.settings.email_confirmation.enabled:
                    return await self._request_confirmation(registration)
                return await self.workflow.complete(context, now)
            except ProvisioningRejected as e:
                logfire.info(
                    "Provisioning rejected",
                    code=request.code,
                    reason=e.reason.value,
                    platform=e.platform.value if e.platform else None,
                )
                return rejected(e)

    async def _request_confirmation(
        self, registration: Registration
    ) -> ProvisioningResponse:
        if not registration.email:
            raise EmailRequiredError()

        token = self.confirmation_service.issue(registration)
        if not await self.invite_service.record_key(registration.code, token):
            raise InvalidCodeError(registration.code)

        message = self.message_service.confirmation(
            registration.username,
            token,
            self.settings.email_confirmation.expiry_hours,
        )
        report = await self.notification_service.send_to_address(
            message, registration.email
        )
        if not report.ok:
            logfire.error(
                "Failed to send confirmation email",
                code=registration.code,
                failures=report.failures,
            )
            raise ConfirmationFailedError("Failed to send confirmation email")

        logfire.info(
            "Confirmation pending", code=registration.code, username=registration.username
        )
        return ProvisioningResponse(
            status=ProvisioningStatus.CONFIRMATION_PENDING,
            message="Check your email to finish creating your account",
        )

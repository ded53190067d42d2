"""Provisioning workflow shared by the begin and resume entry points.

Steps before account creation raise ``ProvisioningRejected`` and leave no
trace. Once the account exists every later step is best effort: failures
are collected into ``diagnostics`` and the run still reports success.
"""

from collections.abc import Awaitable
from datetime import datetime
from typing import TypeVar

import logfire
from pydantic import BaseModel, Field

from enroll.config import Settings
from enroll.domain.error import (
    ConfirmationRejectedError,
    EmailRequiredError,
    ExternalServiceError,
    InvalidCodeError,
    InvalidPINError,
    ProvisioningRejected,
    UserExistsError,
    VerificationRequiredError,
)
from enroll.domain.model import Account, Invite, Profile
from enroll.domain.service import (
    AccountService,
    CompanionService,
    HousekeepingService,
    InviteService,
    MessageService,
    NotificationService,
    ProfileService,
    Verifier,
)
from enroll.domain.value import (
    VERIFICATION_ORDER,
    DeliveryReport,
    Platform,
    ProvisioningStatus,
    Registration,
    RejectionReason,
    VerificationPIN,
    VerifiedIdentity,
)

T = TypeVar("T")


class ProvisioningResponse(BaseModel):
    """Outcome of a provisioning attempt."""

    status: ProvisioningStatus
    reason: RejectionReason | None = None
    platform: Platform | None = None
    message: str | None = None
    account_id: str | None = None
    diagnostics: dict[str, str] = Field(default_factory=dict)


class ProvisioningContext(BaseModel):
    """Everything one run has resolved so far. Never persisted."""

    registration: Registration
    invite: Invite
    profile: Profile | None = None
    identities: dict[Platform, VerifiedIdentity] = Field(default_factory=dict)
    account: Account | None = None
    expiry: datetime | None = None
    diagnostics: dict[str, str] = Field(default_factory=dict)

    def note(self, step: str, error: object) -> None:
        self.diagnostics[step] = str(error)


def rejected(error: ProvisioningRejected) -> ProvisioningResponse:
    """Turn a pre-creation failure into a response."""
    return ProvisioningResponse(
        status=ProvisioningStatus.REJECTED,
        reason=error.reason,
        platform=error.platform,
        message=str(error),
    )


class ProvisioningWorkflow:
    """Validation and post-confirmation steps of provisioning."""

    def __init__(
        self,
        invite_service: InviteService,
        housekeeping_service: HousekeepingService,
        account_service: AccountService,
        profile_service: ProfileService,
        companion_service: CompanionService,
        notification_service: NotificationService,
        message_service: MessageService,
        verifiers: dict[Platform, Verifier],
        settings: Settings,
    ) -> None:
        """Initialize provisioning workflow.

        Args:
            invite_service: Invite domain service
            housekeeping_service: Expiry-aware invite lookup
            account_service: Account creation and bookkeeping
            profile_service: Profile application
            companion_service: Companion notification linking
            notification_service: Message dispatch
            message_service: Message rendering
            verifiers: One verifier per platform
            settings: Application settings
        """
        self.invite_service = invite_service
        self.housekeeping_service = housekeeping_service
        self.account_service = account_service
        self.profile_service = profile_service
        self.companion_service = companion_service
        self.notification_service = notification_service
        self.message_service = message_service
        self.verifiers = verifiers
        self.settings = settings

    # ------------------------------------------------------------------
    # Before the account exists
    # ------------------------------------------------------------------

    async def validate(self, registration: Registration, now: datetime) -> ProvisioningContext:
        """Check the invite and every verification.

        Raises:
            ProvisioningRejected: The first check that fails
        """
        invite = await self.validate_invite(registration, now)
        identities = await self.validate_verifications(registration)
        profile = await self.profile_service.resolve(invite.profile)
        return ProvisioningContext(
            registration=registration,
            invite=invite,
            profile=profile,
            identities=identities,
        )

    async def validate_invite(self, registration: Registration, now: datetime) -> Invite:
        invite = await self.housekeeping_service.check_invite(registration.code, now)
        if invite is None:
            logfire.info("Invalid invite code", code=registration.code)
            raise InvalidCodeError(registration.code)

        try:
            exists = await self.account_service.exists(registration.username)
        except ExternalServiceError as e:
            # Creation below reports the real problem if the service is down
            logfire.warn("Could not check for existing user", error=str(e))
            exists = False
        if exists:
            logfire.info("User already exists", username=registration.username)
            raise UserExistsError(registration.username)

        if self.settings.email.required and not registration.email:
            raise EmailRequiredError()
        return invite

    async def validate_verifications(
        self, registration: Registration
    ) -> dict[Platform, VerifiedIdentity]:
        """Resolve every supplied PIN, in fixed platform order."""
        identities: dict[Platform, VerifiedIdentity] = {}
        for platform in VERIFICATION_ORDER:
            verifier = self.verifiers.get(platform)
            if verifier is None or not verifier.enabled:
                continue

            pin = registration.pin_for(platform)
            if not pin:
                if verifier.required:
                    logfire.info(
                        "Verification required", platform=platform.value, code=registration.code
                    )
                    raise VerificationRequiredError(platform)
                continue

            identity = await verifier.check_verified(VerificationPIN(pin))
            if identity is None:
                logfire.info("Invalid PIN", platform=platform.value, code=registration.code)
                raise InvalidPINError(platform)
            identities[platform] = identity
        return identities

    # ------------------------------------------------------------------
    # Account creation onwards
    # ------------------------------------------------------------------

    async def complete(
        self, context: ProvisioningContext, now: datetime, key: str | None = None
    ) -> ProvisioningResponse:
        """Reserve an invite use, create the account and run every follow-up step.

        Args:
            context: Output of ``validate``
            now: Time of the request
            key: Confirmation token that unlocked this run, if any

        Raises:
            InvalidCodeError: If no use of the invite is left to reserve
            ConfirmationRejectedError: If ``key`` was spent by another run
            AccountCreationFailedError: If the account service refuses
        """
        registration = context.registration
        code = context.invite.code
        with logfire.span(
            "provisioning.complete",
            code=registration.code,
            username=registration.username,
        ):
            if not await self.invite_service.reserve(code, now, key):
                if key is not None:
                    raise ConfirmationRejectedError("Confirmation link already used")
                raise InvalidCodeError(registration.code)

            try:
                context.account = await self.account_service.create(
                    registration.username, registration.password
                )
            except Exception:
                await self.invite_service.release(code, key)
                raise

            await self.apply_profile(context, now)
            await self.link_identities(context)
            await self.notify(context, now)
            await self.record_invite_use(context, now)

            if context.diagnostics:
                logfire.warn(
                    "Account created with partial failures",
                    account_id=context.account.id,
                    diagnostics=context.diagnostics,
                )
            else:
                logfire.info("Account provisioned", account_id=context.account.id)

            return ProvisioningResponse(
                status=ProvisioningStatus.CREATED,
                account_id=context.account.id,
                diagnostics=context.diagnostics,
            )

    async def attempt(
        self, context: ProvisioningContext, step: str, call: Awaitable[T]
    ) -> T | None:
        """Await a bookkeeping write, noting a failure instead of raising."""
        try:
            return await call
        except Exception as e:
            logfire.error(
                "Provisioning step failed",
                step=step,
                account_id=context.account.id,
                error=str(e),
            )
            context.note(step, e)
            return None

    async def apply_profile(self, context: ProvisioningContext, now: datetime) -> None:
        account = context.account
        registration = context.registration

        if context.profile is not None:
            result = await self.profile_service.apply(
                account.id,
                context.profile,
                username=registration.username,
                password=registration.password,
                email=registration.email,
            )
            for aspect, error in result.errors.items():
                context.note(f"profile.{aspect.value}", error)

        if registration.email:
            await self.attempt(
                context,
                "email",
                self.account_service.record_email(account.id, registration.email),
            )

        context.expiry = await self.attempt(
            context,
            "expiry",
            self.account_service.set_expiry(account.id, context.invite.user_expiry, now),
        )

    async def link_identities(self, context: ProvisioningContext) -> None:
        account = context.account
        registration = context.registration

        for platform, identity in list(context.identities.items()):
            verifier = self.verifiers[platform]
            consumed = await verifier.consume(VerificationPIN(registration.pin_for(platform)))
            if consumed is None:
                context.note(f"{platform.value}.link", "PIN was already used")
                del context.identities[platform]
                continue

            try:
                consumed = await verifier.after_link(consumed)
            except ExternalServiceError as e:
                logfire.error(
                    "Platform action failed", platform=platform.value, error=str(e)
                )
                context.note(f"{platform.value}.action", e)

            await self.attempt(
                context,
                f"{platform.value}.link",
                self.account_service.link_identity(
                    account.id, consumed, contact=registration.wants_contact(platform)
                ),
            )
            context.identities[platform] = consumed

        if self.companion_service.enabled:
            discord = context.identities.get(Platform.DISCORD)
            telegram = context.identities.get(Platform.TELEGRAM)
            try:
                await self.companion_service.link_notifications(
                    registration.username,
                    discord_id=discord.user_id if discord else "",
                    telegram_username=telegram.display_name if telegram else "",
                )
            except ExternalServiceError as e:
                logfire.error("Failed to link companion notifications", error=str(e))
                context.note("companion.notifications", e)

    async def notify(self, context: ProvisioningContext, now: datetime) -> None:
        messages = self.settings.messages
        account = context.account

        if messages.welcome:
            welcome = self.message_service.welcome(account.name, context.expiry)
            report = await self.notification_service.send_to_account(welcome, account.id)
            self._note_failures(context, "welcome", report)

        if messages.notifications:
            addresses = context.invite.subscribers(creation=True)
            if addresses:
                created = self.message_service.user_created(
                    context.invite, account.name, now, context.registration.email
                )
                report = await self.notification_service.send_to_addresses(
                    created, addresses
                )
                self._note_failures(context, "notify", report)

    async def record_invite_use(self, context: ProvisioningContext, now: datetime) -> None:
        await self.attempt(
            context,
            "invite",
            self.invite_service.record_use(
                context.invite.code, context.registration.username, now
            ),
        )

    @staticmethod
    def _note_failures(
        context: ProvisioningContext, step: str, report: DeliveryReport
    ) -> None:
        for recipient, error in report.failures.items():
            context.note(f"{step}.{recipient}", error)

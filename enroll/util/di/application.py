"""Application layer DI providers."""

from dishka import Scope, provide

from enroll.application.usecase.invite import (
    CreateInviteUseCase,
    DeleteInviteUseCase,
    ListInvitesUseCase,
    SetInviteNotifyUseCase,
    SetInviteProfileUseCase,
    SweepExpiredInvitesUseCase,
    ValidateInviteUseCase,
)
from enroll.application.usecase.profile import (
    CreateProfileUseCase,
    DeleteProfileUseCase,
    ListProfilesUseCase,
    SetDefaultProfileUseCase,
)
from enroll.application.usecase.provisioning import (
    BeginProvisioningUseCase,
    ProvisioningWorkflow,
    ResumeProvisioningUseCase,
)
from enroll.application.usecase.user import (
    AnnounceUseCase,
    DeleteAnnouncementTemplateUseCase,
    GetAnnouncementTemplateUseCase,
    ListAnnouncementTemplatesUseCase,
    SaveAnnouncementTemplateUseCase,
)
from enroll.application.usecase.verification import (
    CheckVerificationUseCase,
    IssuePINUseCase,
    LinkIdentityUseCase,
    ListIdentitiesUseCase,
    MarkVerifiedUseCase,
)
from enroll.config import Settings
from enroll.domain.service import (
    AccountService,
    AnnouncementService,
    CompanionService,
    ConfirmationService,
    DiscordClient,
    HousekeepingService,
    InviteService,
    MessageService,
    NotificationService,
    ProfileService,
    Verifier,
)
from enroll.domain.value import Platform
from enroll.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Use cases, one fresh instance per request."""

    scope = Scope.REQUEST

    # Provisioning
    @provide
    def get_provisioning_workflow(
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
    ) -> ProvisioningWorkflow:
        return ProvisioningWorkflow(
            invite_service=invite_service,
            housekeeping_service=housekeeping_service,
            account_service=account_service,
            profile_service=profile_service,
            companion_service=companion_service,
            notification_service=notification_service,
            message_service=message_service,
            verifiers=verifiers,
            settings=settings,
        )

    @provide
    def get_begin_provisioning_use_case(
        self,
        workflow: ProvisioningWorkflow,
        confirmation_service: ConfirmationService,
        invite_service: InviteService,
        notification_service: NotificationService,
        message_service: MessageService,
        settings: Settings,
    ) -> BeginProvisioningUseCase:
        return BeginProvisioningUseCase(
            workflow=workflow,
            confirmation_service=confirmation_service,
            invite_service=invite_service,
            notification_service=notification_service,
            message_service=message_service,
            settings=settings,
        )

    @provide
    def get_resume_provisioning_use_case(
        self, workflow: ProvisioningWorkflow, confirmation_service: ConfirmationService
    ) -> ResumeProvisioningUseCase:
        return ResumeProvisioningUseCase(
            workflow=workflow, confirmation_service=confirmation_service
        )

    # Invites
    @provide
    def get_create_invite_use_case(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
        message_service: MessageService,
        discord_client: DiscordClient,
        settings: Settings,
    ) -> CreateInviteUseCase:
        return CreateInviteUseCase(
            invite_service=invite_service,
            notification_service=notification_service,
            message_service=message_service,
            discord_client=discord_client,
            settings=settings,
        )

    @provide
    def get_list_invites_use_case(
        self,
        invite_service: InviteService,
        housekeeping_service: HousekeepingService,
        profile_service: ProfileService,
        message_service: MessageService,
        settings: Settings,
    ) -> ListInvitesUseCase:
        return ListInvitesUseCase(
            invite_service=invite_service,
            housekeeping_service=housekeeping_service,
            profile_service=profile_service,
            message_service=message_service,
            settings=settings,
        )

    @provide
    def get_delete_invite_use_case(self, invite_service: InviteService) -> DeleteInviteUseCase:
        return DeleteInviteUseCase(invite_service=invite_service)

    @provide
    def get_set_invite_profile_use_case(
        self, invite_service: InviteService
    ) -> SetInviteProfileUseCase:
        return SetInviteProfileUseCase(invite_service=invite_service)

    @provide
    def get_set_invite_notify_use_case(
        self, invite_service: InviteService, settings: Settings
    ) -> SetInviteNotifyUseCase:
        return SetInviteNotifyUseCase(invite_service=invite_service, settings=settings)

    @provide
    def get_sweep_expired_invites_use_case(
        self, housekeeping_service: HousekeepingService
    ) -> SweepExpiredInvitesUseCase:
        return SweepExpiredInvitesUseCase(housekeeping_service=housekeeping_service)

    @provide
    def get_validate_invite_use_case(
        self,
        housekeeping_service: HousekeepingService,
        verifiers: dict[Platform, Verifier],
        settings: Settings,
    ) -> ValidateInviteUseCase:
        return ValidateInviteUseCase(
            housekeeping_service=housekeeping_service, verifiers=verifiers, settings=settings
        )

    # Verification
    @provide
    def get_issue_pin_use_case(
        self,
        housekeeping_service: HousekeepingService,
        verifiers: dict[Platform, Verifier],
    ) -> IssuePINUseCase:
        return IssuePINUseCase(housekeeping_service=housekeeping_service, verifiers=verifiers)

    @provide
    def get_check_verification_use_case(
        self,
        housekeeping_service: HousekeepingService,
        verifiers: dict[Platform, Verifier],
    ) -> CheckVerificationUseCase:
        return CheckVerificationUseCase(
            housekeeping_service=housekeeping_service, verifiers=verifiers
        )

    @provide
    def get_mark_verified_use_case(
        self, verifiers: dict[Platform, Verifier]
    ) -> MarkVerifiedUseCase:
        return MarkVerifiedUseCase(verifiers=verifiers)

    @provide
    def get_link_identity_use_case(
        self, account_service: AccountService, verifiers: dict[Platform, Verifier]
    ) -> LinkIdentityUseCase:
        return LinkIdentityUseCase(account_service=account_service, verifiers=verifiers)

    @provide
    def get_list_identities_use_case(
        self, account_service: AccountService
    ) -> ListIdentitiesUseCase:
        return ListIdentitiesUseCase(account_service=account_service)

    # Profiles
    @provide
    def get_list_profiles_use_case(self, profile_service: ProfileService) -> ListProfilesUseCase:
        return ListProfilesUseCase(profile_service=profile_service)

    @provide
    def get_set_default_profile_use_case(
        self, profile_service: ProfileService
    ) -> SetDefaultProfileUseCase:
        return SetDefaultProfileUseCase(profile_service=profile_service)

    @provide
    def get_delete_profile_use_case(
        self, profile_service: ProfileService
    ) -> DeleteProfileUseCase:
        return DeleteProfileUseCase(profile_service=profile_service)

    @provide
    def get_create_profile_use_case(
        self, profile_service: ProfileService, companion_service: CompanionService
    ) -> CreateProfileUseCase:
        return CreateProfileUseCase(
            profile_service=profile_service, companion_service=companion_service
        )

    # Users
    @provide
    def get_announce_use_case(
        self,
        account_service: AccountService,
        message_service: MessageService,
        notification_service: NotificationService,
    ) -> AnnounceUseCase:
        return AnnounceUseCase(
            account_service=account_service,
            message_service=message_service,
            notification_service=notification_service,
        )

    @provide
    def get_save_announcement_template_use_case(
        self, announcement_service: AnnouncementService
    ) -> SaveAnnouncementTemplateUseCase:
        return SaveAnnouncementTemplateUseCase(announcement_service=announcement_service)

    @provide
    def get_list_announcement_templates_use_case(
        self, announcement_service: AnnouncementService
    ) -> ListAnnouncementTemplatesUseCase:
        return ListAnnouncementTemplatesUseCase(announcement_service=announcement_service)

    @provide
    def get_get_announcement_template_use_case(
        self, announcement_service: AnnouncementService
    ) -> GetAnnouncementTemplateUseCase:
        return GetAnnouncementTemplateUseCase(announcement_service=announcement_service)

    @provide
    def get_delete_announcement_template_use_case(
        self, announcement_service: AnnouncementService
    ) -> DeleteAnnouncementTemplateUseCase:
        return DeleteAnnouncementTemplateUseCase(announcement_service=announcement_service)

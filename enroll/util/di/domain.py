"""Domain layer DI providers."""

from dishka import Scope, provide

from enroll.config import EmailConfirmationSettings, MessagesSettings, Settings
from enroll.domain.repository import (
    AccountExpiryRepository,
    AnnouncementTemplateRepository,
    EmailAddressRepository,
    InviteRepository,
    LinkedIdentityRepository,
    ProfileRepository,
)
from enroll.domain.service import (
    AccountClient,
    AccountService,
    AnnouncementService,
    ChatClient,
    CompanionClient,
    CompanionService,
    ConfirmationService,
    EmailSender,
    HousekeepingService,
    InviteService,
    MessageService,
    NotificationService,
    ProfileService,
)
from enroll.domain.value import Platform
from enroll.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services.

    Services that touch repositories are REQUEST-scoped so they share the
    request's session. Stateless ones live for the whole app.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_message_service(self, settings: Settings) -> MessageService:
        return MessageService(messages_settings=settings.messages, api_settings=settings.api)

    @provide(scope=Scope.APP)
    def get_confirmation_service(
        self, settings: EmailConfirmationSettings
    ) -> ConfirmationService:
        return ConfirmationService(settings=settings)

    @provide(scope=Scope.APP)
    def get_companion_service(
        self, client: CompanionClient, settings: Settings
    ) -> CompanionService:
        return CompanionService(client=client, settings=settings.companion)

    @provide
    def get_invite_service(
        self, invite_repository: InviteRepository, profile_repository: ProfileRepository
    ) -> InviteService:
        return InviteService(
            invite_repository=invite_repository, profile_repository=profile_repository
        )

    @provide
    def get_account_service(
        self,
        account_client: AccountClient,
        email_repository: EmailAddressRepository,
        identity_repository: LinkedIdentityRepository,
        expiry_repository: AccountExpiryRepository,
    ) -> AccountService:
        return AccountService(
            account_client=account_client,
            email_repository=email_repository,
            identity_repository=identity_repository,
            expiry_repository=expiry_repository,
        )

    @provide
    def get_profile_service(
        self,
        profile_repository: ProfileRepository,
        account_client: AccountClient,
        companion_client: CompanionClient,
        settings: Settings,
    ) -> ProfileService:
        return ProfileService(
            profile_repository=profile_repository,
            account_client=account_client,
            companion_client=companion_client,
            companion_settings=settings.companion,
        )

    @provide
    def get_notification_service(
        self,
        settings: Settings,
        email_sender: EmailSender,
        chat_clients: dict[Platform, ChatClient],
        email_repository: EmailAddressRepository,
        identity_repository: LinkedIdentityRepository,
    ) -> NotificationService:
        """Provide the dispatcher with every chat transport."""
        return NotificationService(
            settings=settings,
            email_sender=email_sender,
            chat_clients=chat_clients,
            email_repository=email_repository,
            identity_repository=identity_repository,
        )

    @provide
    def get_housekeeping_service(
        self,
        invite_service: InviteService,
        notification_service: NotificationService,
        message_service: MessageService,
        messages_settings: MessagesSettings,
    ) -> HousekeepingService:
        return HousekeepingService(
            invite_service=invite_service,
            notification_service=notification_service,
            message_service=message_service,
            messages_settings=messages_settings,
        )

    @provide
    def get_announcement_service(
        self,
        template_repository: AnnouncementTemplateRepository,
        message_service: MessageService,
    ) -> AnnouncementService:
        return AnnouncementService(
            template_repository=template_repository, message_service=message_service
        )

"""Mock persistence providers for testing."""

from dishka import Scope, provide

from enroll.domain.repository import (
    AccountExpiryRepository,
    AnnouncementTemplateRepository,
    EmailAddressRepository,
    InviteRepository,
    LinkedIdentityRepository,
    ProfileRepository,
)
from enroll.persistence.repository.inmemory import (
    InMemoryAccountExpiryRepository,
    InMemoryAnnouncementTemplateRepository,
    InMemoryEmailAddressRepository,
    InMemoryInviteRepository,
    InMemoryLinkedIdentityRepository,
    InMemoryProfileRepository,
)
from enroll.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """In-memory repositories.

    APP scope keeps state across the requests of one container; every test
    builds its own container, so tests never share storage.
    """

    __is_mock__ = True

    scope = Scope.APP

    @provide
    def get_invite_repository(self) -> InviteRepository:
        return InMemoryInviteRepository()

    @provide
    def get_profile_repository(self) -> ProfileRepository:
        return InMemoryProfileRepository()

    @provide
    def get_linked_identity_repository(self) -> LinkedIdentityRepository:
        return InMemoryLinkedIdentityRepository()

    @provide
    def get_email_address_repository(self) -> EmailAddressRepository:
        return InMemoryEmailAddressRepository()

    @provide
    def get_account_expiry_repository(self) -> AccountExpiryRepository:
        return InMemoryAccountExpiryRepository()

    @provide
    def get_announcement_template_repository(self) -> AnnouncementTemplateRepository:
        return InMemoryAnnouncementTemplateRepository()

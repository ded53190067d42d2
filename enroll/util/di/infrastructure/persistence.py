"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from enroll.config import Settings
from enroll.domain.repository import (
    AccountExpiryRepository,
    AnnouncementTemplateRepository,
    EmailAddressRepository,
    InviteRepository,
    LinkedIdentityRepository,
    ProfileRepository,
)
from enroll.persistence.database import create_engine, create_session_factory
from enroll.persistence.repository import (
    PostgresAccountExpiryRepository,
    PostgresAnnouncementTemplateRepository,
    PostgresEmailAddressRepository,
    PostgresInviteRepository,
    PostgresLinkedIdentityRepository,
    PostgresProfileRepository,
)
from enroll.util.di.base import ProviderBase
from enroll.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL repositories.

    Most share one session per request. Invites commit per call so their
    row locks stay short.
    """

    __is_mock__ = False

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide the request's session.

        Committed when the request scope closes cleanly, rolled back when it
        closes with an exception.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide
    def get_invite_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> InviteRepository:
        return PostgresInviteRepository(session_factory)

    @provide
    def get_profile_repository(self, session: AsyncSession) -> ProfileRepository:
        return PostgresProfileRepository(session)

    @provide
    def get_linked_identity_repository(self, session: AsyncSession) -> LinkedIdentityRepository:
        return PostgresLinkedIdentityRepository(session)

    @provide
    def get_email_address_repository(self, session: AsyncSession) -> EmailAddressRepository:
        return PostgresEmailAddressRepository(session)

    @provide
    def get_account_expiry_repository(self, session: AsyncSession) -> AccountExpiryRepository:
        return PostgresAccountExpiryRepository(session)

    @provide
    def get_announcement_template_repository(
        self, session: AsyncSession
    ) -> AnnouncementTemplateRepository:
        return PostgresAnnouncementTemplateRepository(session)

"""PostgreSQL implementation of Invite repository."""

from collections.abc import Callable
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from enroll.domain.error import DuplicateCodeError
from enroll.domain.model import Invite
from enroll.domain.repository import InviteRepository
from enroll.domain.value import InviteCode
from enroll.persistence.mappers import invite_to_dict, row_to_invite
from enroll.persistence.tables import invites_table


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository.

    Does not join the request session. Every call runs in its own
    transaction, and a mutation locks the invite's row
    (``SELECT ... FOR UPDATE``) only until that transaction commits.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self.session_factory = session_factory

    @staticmethod
    async def _locked(session: AsyncSession, code: InviteCode) -> Optional[Invite]:
        stmt = select(invites_table).where(invites_table.c.code == code).with_for_update()
        result = await session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    @staticmethod
    async def _write(session: AsyncSession, invite: Invite) -> None:
        stmt = (
            update(invites_table)
            .where(invites_table.c.code == invite.code)
            .values(**invite_to_dict(invite))
        )
        await session.execute(stmt)

    @staticmethod
    async def _delete(session: AsyncSession, code: InviteCode) -> bool:
        result = await session.execute(delete(invites_table).where(invites_table.c.code == code))
        return result.rowcount > 0

    async def create(self, invite: Invite) -> Invite:
        try:
            async with self.session_factory.begin() as session:
                await session.execute(insert(invites_table).values(**invite_to_dict(invite)))
        except IntegrityError:
            raise DuplicateCodeError(invite.code)
        return invite

    async def find_by_code(self, code: InviteCode) -> Optional[Invite]:
        async with self.session_factory() as session:
            stmt = select(invites_table).where(invites_table.c.code == code)
            result = await session.execute(stmt)
            row = result.mappings().first()
            return row_to_invite(dict(row)) if row else None

    async def find_all(self) -> list[Invite]:
        async with self.session_factory() as session:
            stmt = select(invites_table).order_by(invites_table.c.created)
            result = await session.execute(stmt)
            return [row_to_invite(dict(row)) for row in result.mappings().all()]

    async def find_expired(self, now: datetime) -> list[Invite]:
        async with self.session_factory() as session:
            stmt = (
                select(invites_table)
                .where(invites_table.c.valid_till <= now)
                .order_by(invites_table.c.created)
            )
            result = await session.execute(stmt)
            return [row_to_invite(dict(row)) for row in result.mappings().all()]

    async def update(
        self, code: InviteCode, change: Callable[[Invite], Invite]
    ) -> Optional[Invite]:
        async with self.session_factory.begin() as session:
            invite = await self._locked(session, code)
            if invite is None:
                return None
            updated = change(invite)
            await self._write(session, updated)
            return updated

    async def add_key(self, code: InviteCode, key: str) -> bool:
        return await self.update(code, lambda invite: invite.with_key(key)) is not None

    async def consume(
        self,
        code: InviteCode,
        identity: str,
        now: datetime,
        key: str | None = None,
    ) -> bool:
        async with self.session_factory.begin() as session:
            invite = await self._locked(session, code)
            if invite is None:
                return False
            if invite.is_expired(now):
                await self._delete(session, code)
                return False
            if invite.is_exhausted:
                return False
            if invite.is_last_use:
                await self._delete(session, code)
                return True
            await self._write(session, invite.after_use(identity, now, key))
            return True

    async def reserve(
        self, code: InviteCode, now: datetime, key: str | None = None
    ) -> bool:
        async with self.session_factory.begin() as session:
            invite = await self._locked(session, code)
            if invite is None or not invite.can_reserve(now, key):
                return False
            await self._write(session, invite.reserve(key))
            return True

    async def release(self, code: InviteCode, key: str | None = None) -> None:
        async with self.session_factory.begin() as session:
            invite = await self._locked(session, code)
            if invite is not None:
                await self._write(session, invite.release(key))

    async def record_use(self, code: InviteCode, identity: str, now: datetime) -> bool:
        async with self.session_factory.begin() as session:
            invite = await self._locked(session, code)
            if invite is None:
                return False
            settled = invite.settle(identity, now)
            if settled.is_spent:
                await self._delete(session, code)
            else:
                await self._write(session, settled)
            return True

    async def delete(self, code: InviteCode) -> bool:
        async with self.session_factory.begin() as session:
            return await self._delete(session, code)

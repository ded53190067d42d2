"""Integration tests for PostgresInviteRepository.

Require a migrated PostgreSQL database at ``DATABASE__URL``.
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from enroll.domain.error import DuplicateCodeError
from enroll.domain.model import Invite
from enroll.domain.repository import InviteRepository
from enroll.domain.value import DurationOffset, InviteCode, NotifyPreference
from enroll.persistence.tables import invites_table
from tests.conftest import utc
from tests.harness import create_env_fixture

integration_env = create_env_fixture(unmock={"persistence"})

NOW = utc(2024, 6, 1, 12, 0)


def new_invite(**kwargs) -> Invite:
    fields = {
        "code": InviteCode(f"it{uuid4().hex}"),
        "created": NOW,
        "valid_till": NOW + timedelta(days=1),
    }
    fields.update(kwargs)
    return Invite(**fields)


class TestPostgresInviteRepository:
    @pytest.mark.asyncio
    async def test_round_trips_nested_fields(self, integration_env):
        repo = await integration_env.get(InviteRepository)
        invite = new_invite(
            label="friends",
            user_expiry=DurationOffset(months=1, days=2),
            notify={"admin@example.com": NotifyPreference(notify_expiry=True)},
        )

        await repo.create(invite)
        found = await repo.find_by_code(invite.code)

        assert found.label == "friends"
        assert found.user_expiry == DurationOffset(months=1, days=2)
        assert found.notify["admin@example.com"].notify_expiry
        assert found.valid_till == invite.valid_till

    @pytest.mark.asyncio
    async def test_duplicate_code(self, integration_env):
        repo = await integration_env.get(InviteRepository)
        invite = new_invite()
        await repo.create(invite)

        with pytest.raises(DuplicateCodeError):
            await repo.create(invite)

        assert await repo.find_by_code(invite.code) is not None

    @pytest.mark.asyncio
    async def test_consume_counts_down_then_deletes(self, integration_env):
        repo = await integration_env.get(InviteRepository)
        invite = new_invite(remaining_uses=2)
        await repo.create(invite)
        await repo.add_key(invite.code, "token-1")

        assert await repo.consume(invite.code, "alice", NOW, key="token-1")
        after_first = await repo.find_by_code(invite.code)
        assert after_first.remaining_uses == 1
        assert after_first.keys == ()
        assert [r.identity for r in after_first.used_by] == ["alice"]

        assert await repo.consume(invite.code, "bob", NOW)
        assert await repo.find_by_code(invite.code) is None
        assert not await repo.consume(invite.code, "carol", NOW)

    @pytest.mark.asyncio
    async def test_consume_expired_deletes(self, integration_env):
        repo = await integration_env.get(InviteRepository)
        invite = new_invite()
        await repo.create(invite)

        assert not await repo.consume(invite.code, "alice", NOW + timedelta(days=2))
        assert await repo.find_by_code(invite.code) is None

    @pytest.mark.asyncio
    async def test_find_expired(self, integration_env):
        repo = await integration_env.get(InviteRepository)
        old = new_invite(valid_till=NOW - timedelta(minutes=1))
        live = new_invite()
        await repo.create(old)
        await repo.create(live)

        expired = {invite.code for invite in await repo.find_expired(NOW)}

        assert old.code in expired
        assert live.code not in expired

    @pytest.mark.asyncio
    async def test_add_key_releases_row_lock(self, integration_env):
        repo = await integration_env.get(InviteRepository)
        session_factory = await integration_env.get(async_sessionmaker[AsyncSession])
        invite = new_invite()
        await repo.create(invite)

        assert await repo.add_key(invite.code, "token-1")

        # A second connection can take the row lock at once
        async with session_factory() as other:
            stmt = (
                select(invites_table)
                .where(invites_table.c.code == invite.code)
                .with_for_update(nowait=True)
            )
            row = (await other.execute(stmt)).mappings().first()
            await other.rollback()
        assert list(row["keys"]) == ["token-1"]

    @pytest.mark.asyncio
    async def test_reserve_release_and_record_use(self, integration_env):
        repo = await integration_env.get(InviteRepository)
        invite = new_invite(remaining_uses=1)
        await repo.create(invite)
        await repo.add_key(invite.code, "token-1")

        assert await repo.reserve(invite.code, NOW, key="token-1")
        assert not await repo.reserve(invite.code, NOW)
        held = await repo.find_by_code(invite.code)
        await repo.release(invite.code, key="token-1")
        released = await repo.find_by_code(invite.code)

        assert (held.remaining_uses, held.reserved, held.keys) == (0, 1, ())
        assert (released.remaining_uses, released.reserved) == (1, 0)
        assert released.keys == ("token-1",)

        assert await repo.reserve(invite.code, NOW)
        assert await repo.record_use(invite.code, "alice", NOW)
        assert await repo.find_by_code(invite.code) is None

    @pytest.mark.asyncio
    async def test_update_never_recreates(self, integration_env):
        repo = await integration_env.get(InviteRepository)
        invite = new_invite()
        await repo.create(invite)
        await repo.delete(invite.code)

        result = await repo.update(
            invite.code, lambda current: current.model_copy(update={"label": "late"})
        )

        assert result is None
        assert await repo.find_by_code(invite.code) is None

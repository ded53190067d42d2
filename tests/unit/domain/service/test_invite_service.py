"""Unit tests for InviteService."""

import asyncio
from datetime import timedelta

import pytest

from enroll.domain.error import DuplicateCodeError, NotFoundError
from enroll.domain.model import Profile
from enroll.domain.repository import InviteRepository, ProfileRepository
from enroll.domain.service import InviteService, generate_code
from enroll.domain.value import DurationOffset, InviteCode
from tests.conftest import make_invite, utc
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


def test_generated_codes_start_with_a_letter():
    for _ in range(50):
        code = generate_code()
        assert len(code) == 22
        assert code[0].isalpha()


class TestCreateInvite:
    """Tests for create_invite."""

    @pytest.mark.asyncio
    async def test_create_limited_invite(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)

        invite = await invite_service.create_invite(
            now=now, valid_for=DurationOffset(days=2), uses=3, label="friends"
        )

        assert invite.valid_till == utc(2025, 1, 3)
        assert invite.remaining_uses == 3
        assert not invite.no_limit
        assert invite.label == "friends"
        assert await invite_service.get_invite(invite.code) == invite

    @pytest.mark.asyncio
    async def test_create_unlimited_invite(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        invite = await make_invite(invite_service, uses=None)

        assert invite.no_limit
        assert invite.remaining_uses == 0
        assert not invite.is_exhausted

    @pytest.mark.asyncio
    async def test_zero_uses_rejected(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        with pytest.raises(ValueError):
            await make_invite(invite_service, uses=0)

    @pytest.mark.asyncio
    async def test_explicit_duplicate_code_raises(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        await make_invite(invite_service, code=InviteCode("party"))

        with pytest.raises(DuplicateCodeError):
            await make_invite(invite_service, code=InviteCode("party"))

    @pytest.mark.asyncio
    async def test_unknown_profile_falls_back_to_default(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        profile_repo = await unit_env.get(ProfileRepository)
        await profile_repo.save(Profile(name="standard", default=True))

        invite = await make_invite(invite_service, profile="missing")

        assert invite.profile == "standard"

    @pytest.mark.asyncio
    async def test_unknown_profile_without_default_is_empty(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        invite = await make_invite(invite_service, profile="missing")

        assert invite.profile == ""

    @pytest.mark.asyncio
    async def test_zero_user_expiry_is_dropped(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        invite = await make_invite(invite_service, user_expiry=DurationOffset())

        assert invite.user_expiry is None


class TestConsume:
    """Tests for consume."""

    @pytest.mark.asyncio
    async def test_last_use_deletes_invite(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite = await make_invite(invite_service, uses=1)

        assert await invite_service.consume(invite.code, "alice", utc(2025, 1, 1))

        assert await invite_service.get_invite(invite.code) is None

    @pytest.mark.asyncio
    async def test_multi_use_records_usage(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)
        invite = await make_invite(invite_service, uses=3, now=now)

        assert await invite_service.consume(invite.code, "alice", now + timedelta(hours=1))

        stored = await invite_service.get_invite(invite.code)
        assert stored.remaining_uses == 2
        assert [r.identity for r in stored.used_by] == ["alice"]

    @pytest.mark.asyncio
    async def test_unlimited_never_runs_out(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)
        invite = await make_invite(invite_service, uses=None, now=now)

        for name in ("a", "b", "c"):
            assert await invite_service.consume(invite.code, name, now)

        stored = await invite_service.get_invite(invite.code)
        assert len(stored.used_by) == 3

    @pytest.mark.asyncio
    async def test_expired_invite_cannot_be_consumed(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)
        invite = await make_invite(invite_service, uses=2, now=now)

        assert not await invite_service.consume(invite.code, "alice", now + timedelta(days=1))
        assert await invite_service.get_invite(invite.code) is None

    @pytest.mark.asyncio
    async def test_unknown_code(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        assert not await invite_service.consume(InviteCode("nope"), "alice", utc(2025, 1, 1))

    @pytest.mark.asyncio
    async def test_concurrent_consumers_never_overdraw(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)
        invite = await make_invite(invite_service, uses=3, now=now)

        results = await asyncio.gather(
            *(invite_service.consume(invite.code, f"user{i}", now) for i in range(10))
        )

        assert results.count(True) == 3
        assert await invite_service.get_invite(invite.code) is None

    @pytest.mark.asyncio
    async def test_consume_removes_confirmation_key(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)
        invite = await make_invite(invite_service, uses=2, now=now)
        await invite_service.record_key(invite.code, "token-1")
        await invite_service.record_key(invite.code, "token-2")

        await invite_service.consume(invite.code, "alice", now, key="token-1")

        stored = await invite_service.get_invite(invite.code)
        assert stored.keys == ("token-2",)


class TestAdministration:
    """Tests for admin-side invite changes."""

    @pytest.mark.asyncio
    async def test_delete_unknown_raises(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        with pytest.raises(NotFoundError):
            await invite_service.delete_invite(InviteCode("nope"))

    @pytest.mark.asyncio
    async def test_set_profile_requires_existing_profile(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite = await make_invite(invite_service)

        with pytest.raises(NotFoundError):
            await invite_service.set_profile(invite.code, "missing")

        cleared = await invite_service.set_profile(invite.code, "")
        assert cleared.profile == ""

    @pytest.mark.asyncio
    async def test_set_notify_leaves_unset_switches(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        invite = await make_invite(invite_service)

        await invite_service.set_notify(invite.code, "admin@example.com", notify_expiry=True)
        await invite_service.set_notify(invite.code, "admin@example.com", notify_creation=True)

        stored = await invite_repo.find_by_code(invite.code)
        preference = stored.notify["admin@example.com"]
        assert preference.notify_expiry
        assert preference.notify_creation

    @pytest.mark.asyncio
    async def test_record_key_on_missing_invite(self, unit_env):
        invite_service = await unit_env.get(InviteService)

        assert not await invite_service.record_key(InviteCode("gone"), "token")

    @pytest.mark.asyncio
    async def test_edit_racing_consumption_keeps_use(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)
        invite = await make_invite(invite_service, uses=1, now=now)

        await asyncio.gather(
            invite_service.set_notify(invite.code, "admin@example.com", notify_expiry=True),
            invite_service.consume(invite.code, "alice", now),
            return_exceptions=True,
        )

        assert await invite_service.get_invite(invite.code) is None

    @pytest.mark.asyncio
    async def test_edits_never_recreate_deleted_invite(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        invite = await make_invite(invite_service)
        await invite_service.delete_invite(invite.code)

        with pytest.raises(NotFoundError):
            await invite_service.set_notify(invite.code, "admin@example.com", notify_expiry=True)
        with pytest.raises(NotFoundError):
            await invite_service.set_profile(invite.code, "")
        assert await invite_service.set_send_to(invite.code, "bob@example.com") is None

        assert await invite_service.get_invite(invite.code) is None

    @pytest.mark.asyncio
    async def test_edit_keeps_outstanding_reservation(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)
        invite = await make_invite(invite_service, uses=2, now=now)

        assert await invite_service.reserve(invite.code, now)
        edited = await invite_service.set_notify(
            invite.code, "admin@example.com", notify_creation=True
        )

        assert edited.remaining_uses == 1
        assert edited.reserved == 1
        assert edited.notify["admin@example.com"].notify_creation


class TestReservation:
    """Tests for holding a use while an account is being created."""

    @pytest.mark.asyncio
    async def test_last_use_reserved_once(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)
        invite = await make_invite(invite_service, uses=1, now=now)

        results = await asyncio.gather(
            *(invite_service.reserve(invite.code, now) for _ in range(5))
        )

        assert results.count(True) == 1

    @pytest.mark.asyncio
    async def test_release_restores_use_and_key(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)
        invite = await make_invite(invite_service, uses=1, now=now)
        await invite_service.record_key(invite.code, "token-1")

        assert await invite_service.reserve(invite.code, now, key="token-1")
        assert not await invite_service.reserve(invite.code, now)
        await invite_service.release(invite.code, key="token-1")

        stored = await invite_service.get_invite(invite.code)
        assert stored.remaining_uses == 1
        assert stored.reserved == 0
        assert stored.keys == ("token-1",)

    @pytest.mark.asyncio
    async def test_spent_key_cannot_reserve(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)
        invite = await make_invite(invite_service, uses=3, now=now)
        await invite_service.record_key(invite.code, "token-1")

        assert await invite_service.reserve(invite.code, now, key="token-1")
        assert not await invite_service.reserve(invite.code, now, key="token-1")

    @pytest.mark.asyncio
    async def test_record_use_deletes_after_last_settlement(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)
        invite = await make_invite(invite_service, uses=2, now=now)
        assert await invite_service.reserve(invite.code, now)
        assert await invite_service.reserve(invite.code, now)

        assert await invite_service.record_use(invite.code, "alice", now)
        pending = await invite_service.get_invite(invite.code)
        await invite_service.release(invite.code)
        restored = await invite_service.get_invite(invite.code)

        assert pending.remaining_uses == 0
        assert pending.reserved == 1
        assert [record.identity for record in pending.used_by] == ["alice"]
        assert restored.remaining_uses == 1
        assert restored.reserved == 0

        assert await invite_service.reserve(invite.code, now)
        assert await invite_service.record_use(invite.code, "bob", now)
        assert await invite_service.get_invite(invite.code) is None

    @pytest.mark.asyncio
    async def test_expired_invite_cannot_be_reserved(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)
        invite = await make_invite(invite_service, uses=1, now=now)

        assert not await invite_service.reserve(invite.code, now + timedelta(days=2))

    @pytest.mark.asyncio
    async def test_unlimited_invite_keeps_counting(self, unit_env):
        invite_service = await unit_env.get(InviteService)
        now = utc(2025, 1, 1)
        invite = await make_invite(invite_service, uses=None, now=now)

        for name in ("alice", "bob"):
            assert await invite_service.reserve(invite.code, now)
            assert await invite_service.record_use(invite.code, name, now)

        stored = await invite_service.get_invite(invite.code)
        assert stored.reserved == 0
        assert len(stored.used_by) == 2

"""Unit tests for HousekeepingService."""

import asyncio
from datetime import timedelta

import pytest

from enroll.config import Settings
from enroll.domain.service import EmailSender, HousekeepingService, InviteService
from enroll.domain.value import DurationOffset
from tests.conftest import make_invite, utc
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

NOW = utc(2024, 6, 1, 12, 0)


class TestSweep:
    @pytest.mark.asyncio
    async def test_deletes_only_expired(self, unit_env):
        invites = await unit_env.get(InviteService)
        service = await unit_env.get(HousekeepingService)
        old = await make_invite(invites, valid_for=DurationOffset(hours=1), now=NOW)
        fresh = await make_invite(invites, valid_for=DurationOffset(days=2), now=NOW)

        deleted = await service.sweep(NOW + timedelta(hours=1))

        assert deleted == [old.code]
        assert await invites.get_invite(old.code) is None
        assert await invites.get_invite(fresh.code) is not None

    @pytest.mark.asyncio
    async def test_nothing_to_do(self, unit_env):
        service = await unit_env.get(HousekeepingService)

        assert await service.sweep(NOW) == []

    @pytest.mark.asyncio
    async def test_notifies_expiry_subscribers(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.messages.notifications = True
        settings.email.enabled = True
        invites = await unit_env.get(InviteService)
        service = await unit_env.get(HousekeepingService)
        email = await unit_env.get(EmailSender)
        invite = await make_invite(invites, valid_for=DurationOffset(hours=1), now=NOW)
        await invites.set_notify(invite.code, "admin@example.com", notify_expiry=True)
        await invites.set_notify(invite.code, "quiet@example.com", notify_creation=True)

        await service.sweep(NOW + timedelta(days=1))

        [message] = email.sent_to("admin@example.com")
        assert invite.code in message.subject
        assert "never used" in message.text
        assert email.sent_to("quiet@example.com") == []

    @pytest.mark.asyncio
    async def test_no_notification_when_switched_off(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.email.enabled = True
        invites = await unit_env.get(InviteService)
        service = await unit_env.get(HousekeepingService)
        email = await unit_env.get(EmailSender)
        invite = await make_invite(invites, valid_for=DurationOffset(hours=1), now=NOW)
        await invites.set_notify(invite.code, "admin@example.com", notify_expiry=True)

        deleted = await service.sweep(NOW + timedelta(days=1))

        assert deleted == [invite.code]
        assert email.outbox == []

    @pytest.mark.asyncio
    async def test_failed_notification_still_deletes(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.messages.notifications = True
        settings.email.enabled = True
        invites = await unit_env.get(InviteService)
        service = await unit_env.get(HousekeepingService)
        email = await unit_env.get(EmailSender)
        email.failing.add("admin@example.com")
        invite = await make_invite(invites, valid_for=DurationOffset(hours=1), now=NOW)
        await invites.set_notify(invite.code, "admin@example.com", notify_expiry=True)

        assert await service.sweep(NOW + timedelta(days=1)) == [invite.code]


class TestCheckInvite:
    @pytest.mark.asyncio
    async def test_valid(self, unit_env):
        invites = await unit_env.get(InviteService)
        service = await unit_env.get(HousekeepingService)
        invite = await make_invite(invites, now=NOW)

        found = await service.check_invite(invite.code, NOW)

        assert found is not None
        assert found.code == invite.code

    @pytest.mark.asyncio
    async def test_unknown(self, unit_env):
        service = await unit_env.get(HousekeepingService)

        assert await service.check_invite("nope", NOW) is None

    @pytest.mark.asyncio
    async def test_expired_is_retired(self, unit_env):
        invites = await unit_env.get(InviteService)
        service = await unit_env.get(HousekeepingService)
        invite = await make_invite(invites, valid_for=DurationOffset(hours=1), now=NOW)

        assert await service.check_invite(invite.code, NOW + timedelta(hours=2)) is None
        assert await invites.get_invite(invite.code) is None

    @pytest.mark.asyncio
    async def test_concurrent_lookups_notify_once(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.messages.notifications = True
        settings.email.enabled = True
        invites = await unit_env.get(InviteService)
        service = await unit_env.get(HousekeepingService)
        email = await unit_env.get(EmailSender)
        invite = await make_invite(invites, valid_for=DurationOffset(hours=1), now=NOW)
        await invites.set_notify(invite.code, "admin@example.com", notify_expiry=True)
        later = NOW + timedelta(hours=2)

        results = await asyncio.gather(
            service.check_invite(invite.code, later),
            service.check_invite(invite.code, later),
        )

        assert results == [None, None]
        assert len(email.sent_to("admin@example.com")) == 1

    @pytest.mark.asyncio
    async def test_already_removed_invite_not_notified(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.messages.notifications = True
        settings.email.enabled = True
        invites = await unit_env.get(InviteService)
        service = await unit_env.get(HousekeepingService)
        email = await unit_env.get(EmailSender)
        invite = await make_invite(invites, valid_for=DurationOffset(hours=1), now=NOW)
        invite = await invites.set_notify(
            invite.code, "admin@example.com", notify_expiry=True
        )
        await invites.remove(invite.code)

        assert not await service.expire(invite)
        assert email.sent_to("admin@example.com") == []

"""Unit tests for the invite use cases."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from enroll.application.usecase.invite import (
    CreateInviteRequest,
    CreateInviteUseCase,
    DeleteInviteRequest,
    DeleteInviteUseCase,
    InviteNotifyChange,
    ListInvitesRequest,
    ListInvitesUseCase,
    SetInviteNotifyRequest,
    SetInviteNotifyUseCase,
    SetInviteProfileRequest,
    SetInviteProfileUseCase,
    SweepExpiredInvitesRequest,
    SweepExpiredInvitesUseCase,
    ValidateInviteRequest,
    ValidateInviteUseCase,
)
from enroll.config import Settings
from enroll.domain.error import DuplicateCodeError, NotFoundError
from enroll.domain.model import Profile
from enroll.domain.repository import ProfileRepository
from enroll.domain.service import DiscordClient, EmailSender, InviteService
from enroll.domain.value import DurationOffset, Platform, VerifiedIdentity
from tests.conftest import make_invite
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateInvite:
    @pytest.mark.asyncio
    async def test_defaults(self, unit_env):
        use_case = await unit_env.get(CreateInviteUseCase)

        item = await use_case.execute(CreateInviteRequest())

        assert item.remaining_uses == 1
        assert not item.no_limit
        assert item.valid_till - item.created == timedelta(days=1)
        assert item.url.endswith(f"/invite/{item.code}")
        assert item.send_to == ""

    @pytest.mark.asyncio
    async def test_unlimited(self, unit_env):
        use_case = await unit_env.get(CreateInviteUseCase)

        item = await use_case.execute(CreateInviteRequest(no_limit=True, uses=5))

        assert item.no_limit
        assert item.remaining_uses == 0

    @pytest.mark.asyncio
    async def test_duplicate_code(self, unit_env):
        use_case = await unit_env.get(CreateInviteUseCase)
        await use_case.execute(CreateInviteRequest(code="party"))

        with pytest.raises(DuplicateCodeError):
            await use_case.execute(CreateInviteRequest(code="party"))

    def test_zero_validity_rejected(self):
        with pytest.raises(ValidationError):
            CreateInviteRequest(valid_for=DurationOffset())

    def test_zero_uses_rejected(self):
        with pytest.raises(ValidationError):
            CreateInviteRequest(uses=0)

    @pytest.mark.asyncio
    async def test_send_by_email(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.email.enabled = True
        settings.messages.invites = True
        use_case = await unit_env.get(CreateInviteUseCase)
        email = await unit_env.get(EmailSender)

        item = await use_case.execute(CreateInviteRequest(send_to="friend@example.com"))

        assert item.send_to == "friend@example.com"
        [message] = email.sent_to("friend@example.com")
        assert item.code in message.text

    @pytest.mark.asyncio
    async def test_send_failure_recorded(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.email.enabled = True
        settings.messages.invites = True
        use_case = await unit_env.get(CreateInviteUseCase)
        email = await unit_env.get(EmailSender)
        email.failing.add("friend@example.com")

        item = await use_case.execute(CreateInviteRequest(send_to="friend@example.com"))

        assert item.send_to == "Failed to send to friend@example.com"

    @pytest.mark.asyncio
    async def test_send_skipped_when_switched_off(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.email.enabled = True
        use_case = await unit_env.get(CreateInviteUseCase)
        email = await unit_env.get(EmailSender)

        item = await use_case.execute(CreateInviteRequest(send_to="friend@example.com"))

        assert item.send_to == ""
        assert email.outbox == []

    @pytest.mark.asyncio
    async def test_send_by_discord(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.discord.enabled = True
        settings.messages.invites = True
        discord = await unit_env.get(DiscordClient)
        discord.members.append(
            VerifiedIdentity(platform=Platform.DISCORD, user_id="42", display_name="bob")
        )
        use_case = await unit_env.get(CreateInviteUseCase)

        item = await use_case.execute(CreateInviteRequest(send_to="bob"))

        assert item.send_to == "bob (Discord)"
        assert len(discord.sent_to("dm-42")) == 1

    @pytest.mark.asyncio
    async def test_send_by_discord_no_match(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.discord.enabled = True
        settings.messages.invites = True
        use_case = await unit_env.get(CreateInviteUseCase)

        item = await use_case.execute(CreateInviteRequest(send_to="nobody"))

        assert item.send_to == "Failed: 0 Discord users matched nobody"


class TestListInvites:
    @pytest.mark.asyncio
    async def test_sweeps_expired_first(self, unit_env):
        invites = await unit_env.get(InviteService)
        profiles = await unit_env.get(ProfileRepository)
        await profiles.save(Profile(name="basic"))
        past = datetime.now(timezone.utc) - timedelta(days=2)
        await make_invite(invites, now=past)
        live = await make_invite(invites)
        use_case = await unit_env.get(ListInvitesUseCase)

        response = await use_case.execute(ListInvitesRequest())

        assert [item.code for item in response.invites] == [live.code]
        assert response.profiles == ["basic"]

    @pytest.mark.asyncio
    async def test_shows_admin_preferences(self, unit_env):
        invites = await unit_env.get(InviteService)
        invite = await make_invite(invites)
        await invites.set_notify(invite.code, "admin@example.com", notify_expiry=True)
        use_case = await unit_env.get(ListInvitesUseCase)

        response = await use_case.execute(ListInvitesRequest(admin="admin@example.com"))

        [item] = response.invites
        assert item.notify_expiry
        assert not item.notify_creation


class TestAdminChanges:
    @pytest.mark.asyncio
    async def test_delete(self, unit_env):
        invites = await unit_env.get(InviteService)
        invite = await make_invite(invites)
        use_case = await unit_env.get(DeleteInviteUseCase)

        await use_case.execute(DeleteInviteRequest(code=invite.code))

        assert await invites.get_invite(invite.code) is None
        with pytest.raises(NotFoundError):
            await use_case.execute(DeleteInviteRequest(code=invite.code))

    @pytest.mark.asyncio
    async def test_set_profile(self, unit_env):
        invites = await unit_env.get(InviteService)
        profiles = await unit_env.get(ProfileRepository)
        await profiles.save(Profile(name="basic"))
        invite = await make_invite(invites)
        use_case = await unit_env.get(SetInviteProfileUseCase)

        await use_case.execute(SetInviteProfileRequest(code=invite.code, profile="basic"))

        assert (await invites.get_invite(invite.code)).profile == "basic"
        with pytest.raises(NotFoundError):
            await use_case.execute(SetInviteProfileRequest(code=invite.code, profile="nope"))

    @pytest.mark.asyncio
    async def test_set_notify_uses_admin_address(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.admin.email = "admin@example.com"
        invites = await unit_env.get(InviteService)
        invite = await make_invite(invites)
        use_case = await unit_env.get(SetInviteNotifyUseCase)

        await use_case.execute(
            SetInviteNotifyRequest(
                changes={invite.code: InviteNotifyChange(notify_creation=True)}
            )
        )

        stored = await invites.get_invite(invite.code)
        assert stored.subscribers(creation=True) == ["admin@example.com"]
        assert stored.subscribers(expiry=True) == []

    @pytest.mark.asyncio
    async def test_set_notify_without_address(self, unit_env):
        use_case = await unit_env.get(SetInviteNotifyUseCase)

        with pytest.raises(ValueError):
            await use_case.execute(SetInviteNotifyRequest(changes={}))

    @pytest.mark.asyncio
    async def test_sweep(self, unit_env):
        invites = await unit_env.get(InviteService)
        past = datetime.now(timezone.utc) - timedelta(days=2)
        old = await make_invite(invites, now=past)
        use_case = await unit_env.get(SweepExpiredInvitesUseCase)

        response = await use_case.execute(SweepExpiredInvitesRequest())

        assert response.deleted == [old.code]


class TestValidateInvite:
    @pytest.mark.asyncio
    async def test_valid(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.discord.enabled = True
        settings.discord.required = True
        invites = await unit_env.get(InviteService)
        invite = await make_invite(invites)
        use_case = await unit_env.get(ValidateInviteUseCase)

        response = await use_case.execute(ValidateInviteRequest(code=invite.code))

        assert response.valid
        assert response.valid_till == invite.valid_till
        assert response.platforms[Platform.DISCORD].required
        assert not response.platforms[Platform.MATRIX].enabled

    @pytest.mark.asyncio
    async def test_expired(self, unit_env):
        invites = await unit_env.get(InviteService)
        past = datetime.now(timezone.utc) - timedelta(days=2)
        invite = await make_invite(invites, now=past)
        use_case = await unit_env.get(ValidateInviteUseCase)

        response = await use_case.execute(ValidateInviteRequest(code=invite.code))

        assert not response.valid
        assert await invites.get_invite(invite.code) is None

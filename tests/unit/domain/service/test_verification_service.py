"""Unit tests for the platform verifiers."""

import asyncio

import pytest

from enroll.config import Settings
from enroll.domain.error import ExternalServiceError
from enroll.domain.service import (
    DiscordClient,
    DiscordVerifier,
    MatrixClient,
    MatrixVerifier,
    TelegramVerifier,
    generate_pin,
)
from enroll.domain.value import Platform, VerificationPIN
from tests.conftest import identity, verified_pin
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def test_pin_format():
    pin = generate_pin()
    assert len(pin) == 7
    assert pin[3] == "-"
    assert pin.replace("-", "").isdigit()


class TestVerifierContract:
    """Behaviour shared by every platform, exercised through Discord."""

    @pytest.mark.asyncio
    async def test_unverified_pin_is_not_usable(self, unit_env):
        verifier = await unit_env.get(DiscordVerifier)
        pin = await verifier.issue_token("code")

        assert await verifier.check_verified(pin) is None
        assert await verifier.consume(pin) is None

    @pytest.mark.asyncio
    async def test_verified_pin_is_single_use(self, unit_env):
        verifier = await unit_env.get(DiscordVerifier)
        pin = await verified_pin(verifier, user_id="42")

        checked = await verifier.check_verified(pin)
        assert checked.user_id == "42"
        # Checking does not consume
        assert await verifier.check_verified(pin) is not None

        consumed = await verifier.consume(pin)
        assert consumed.user_id == "42"
        assert await verifier.consume(pin) is None
        assert await verifier.check_verified(pin) is None

    @pytest.mark.asyncio
    async def test_unknown_pin_cannot_be_marked(self, unit_env):
        verifier = await unit_env.get(DiscordVerifier)

        marked = await verifier.mark_verified(
            VerificationPIN("000-000"), identity(Platform.DISCORD)
        )

        assert not marked

    @pytest.mark.asyncio
    async def test_concurrent_consume_has_one_winner(self, unit_env):
        verifier = await unit_env.get(DiscordVerifier)
        pin = await verified_pin(verifier)

        results = await asyncio.gather(*(verifier.consume(pin) for _ in range(5)))

        assert sum(result is not None for result in results) == 1

    @pytest.mark.asyncio
    async def test_registries_are_per_platform(self, unit_env):
        discord = await unit_env.get(DiscordVerifier)
        telegram = await unit_env.get(TelegramVerifier)
        pin = await verified_pin(discord)

        assert await telegram.check_verified(pin) is None

    @pytest.mark.asyncio
    async def test_enabled_and_required_follow_settings(self, unit_env):
        settings = await unit_env.get(Settings)
        verifier = await unit_env.get(DiscordVerifier)

        settings.discord.required = True
        assert not verifier.required

        settings.discord.enabled = True
        assert verifier.enabled
        assert verifier.required


class TestDiscordVerifier:
    @pytest.mark.asyncio
    async def test_after_link_opens_dm_and_applies_role(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.discord.member_role_id = "role-1"
        verifier = await unit_env.get(DiscordVerifier)
        client = await unit_env.get(DiscordClient)

        linked = await verifier.after_link(identity(Platform.DISCORD, "42"))

        assert linked.channel_id == "dm-42"
        assert client.roles_applied == ["42"]

    @pytest.mark.asyncio
    async def test_after_link_without_role(self, unit_env):
        verifier = await unit_env.get(DiscordVerifier)
        client = await unit_env.get(DiscordClient)

        await verifier.after_link(identity(Platform.DISCORD, "42"))

        assert client.roles_applied == []

    @pytest.mark.asyncio
    async def test_role_failure_propagates(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.discord.member_role_id = "role-1"
        verifier = await unit_env.get(DiscordVerifier)
        client = await unit_env.get(DiscordClient)
        client.fail_role = True

        with pytest.raises(ExternalServiceError):
            await verifier.after_link(identity(Platform.DISCORD, "42"))


class TestMatrixVerifier:
    @pytest.mark.asyncio
    async def test_issue_sends_pin_to_new_room(self, unit_env):
        verifier = await unit_env.get(MatrixVerifier)
        client = await unit_env.get(MatrixClient)

        pin = await verifier.issue_token("@alice:example.org")

        room = next(iter(client.rooms))
        assert client.rooms[room] == "@alice:example.org"
        [message] = client.sent_to(room)
        assert pin in message.text

    @pytest.mark.asyncio
    async def test_confirm_requires_matching_user(self, unit_env):
        verifier = await unit_env.get(MatrixVerifier)
        pin = await verifier.issue_token("@alice:example.org")

        assert not await verifier.confirm(pin, "@mallory:example.org")
        assert await verifier.check_verified(pin) is None

        assert await verifier.confirm(pin, "@alice:example.org")
        verified = await verifier.check_verified(pin)
        assert verified.user_id == "@alice:example.org"
        assert verified.channel_id.startswith("!room-")

    @pytest.mark.asyncio
    async def test_room_failure_issues_nothing(self, unit_env):
        verifier = await unit_env.get(MatrixVerifier)
        client = await unit_env.get(MatrixClient)
        client.fail_room = True

        with pytest.raises(ExternalServiceError):
            await verifier.issue_token("@alice:example.org")


class TestTelegramVerifier:
    @pytest.mark.asyncio
    async def test_language_is_attached_on_verification(self, unit_env):
        verifier = await unit_env.get(TelegramVerifier)
        await verifier.set_language("555", "de")
        pin = await verifier.issue_token("code")

        await verifier.mark_verified(pin, identity(Platform.TELEGRAM, "555"))

        verified = await verifier.check_verified(pin)
        assert verified.lang == "de"

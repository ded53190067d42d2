"""Unit tests for ProfileService."""

import pytest

from enroll.config import Settings
from enroll.domain.error import ExternalServiceError, NotFoundError
from enroll.domain.model import Profile
from enroll.domain.repository import ProfileRepository
from enroll.domain.service import AccountClient, CompanionClient, ProfileService
from enroll.domain.value import AccountId, ProfileAspect
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

FULL_PROFILE = Profile(
    name="full",
    policy={"EnableDownloads": False},
    configuration={"SubtitleMode": "Smart"},
    display_preferences={"CustomPrefs": {"home0": "resume"}},
    companion_template={"permissions": 32},
)


async def new_account(unit_env, name: str = "alice"):
    client = await unit_env.get(AccountClient)
    return await client.create_account(name, "password")


class TestApply:
    @pytest.mark.asyncio
    async def test_applies_every_aspect(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.companion.enabled = True
        service = await unit_env.get(ProfileService)
        client = await unit_env.get(AccountClient)
        companion = await unit_env.get(CompanionClient)
        account = await new_account(unit_env)

        result = await service.apply(
            account.id, FULL_PROFILE, username="alice", password="pw", email="a@example.com"
        )

        assert result.ok
        assert result.applied == {
            ProfileAspect.POLICY: True,
            ProfileAspect.HOMESCREEN: True,
            ProfileAspect.COMPANION: True,
        }
        stored = client.accounts[account.id]
        assert stored.policy == FULL_PROFILE.policy
        assert stored.configuration == FULL_PROFILE.configuration
        assert client.display_preferences[account.id] == FULL_PROFILE.display_preferences
        [user] = companion.users.values()
        assert user["userName"] == "alice"
        assert user["permissions"] == 32

    @pytest.mark.asyncio
    async def test_failed_aspect_does_not_stop_the_rest(self, unit_env):
        service = await unit_env.get(ProfileService)
        client = await unit_env.get(AccountClient)
        account = await new_account(unit_env)
        client.fail_on.add("set_policy")

        result = await service.apply(account.id, FULL_PROFILE)

        assert not result.ok
        assert result.applied[ProfileAspect.POLICY] is False
        assert ProfileAspect.POLICY in result.errors
        assert result.applied[ProfileAspect.HOMESCREEN] is True
        assert client.display_preferences[account.id] == FULL_PROFILE.display_preferences

    @pytest.mark.asyncio
    async def test_display_preferences_failure_marks_homescreen(self, unit_env):
        service = await unit_env.get(ProfileService)
        client = await unit_env.get(AccountClient)
        account = await new_account(unit_env)
        client.fail_on.add("set_display_preferences")

        result = await service.apply(account.id, FULL_PROFILE)

        assert result.applied[ProfileAspect.POLICY] is True
        assert result.applied[ProfileAspect.HOMESCREEN] is False

    @pytest.mark.asyncio
    async def test_companion_skipped_when_disabled(self, unit_env):
        service = await unit_env.get(ProfileService)
        companion = await unit_env.get(CompanionClient)
        account = await new_account(unit_env)

        result = await service.apply(account.id, FULL_PROFILE)

        assert ProfileAspect.COMPANION not in result.applied
        assert companion.users == {}

    @pytest.mark.asyncio
    async def test_policy_only_profile(self, unit_env):
        service = await unit_env.get(ProfileService)
        account = await new_account(unit_env)

        result = await service.apply(account.id, Profile(name="p", policy={"IsHidden": True}))

        assert result.applied == {ProfileAspect.POLICY: True}


class TestResolve:
    @pytest.mark.asyncio
    async def test_named_profile(self, unit_env):
        service = await unit_env.get(ProfileService)
        repo = await unit_env.get(ProfileRepository)
        await repo.save(Profile(name="basic"))

        assert (await service.resolve("basic")).name == "basic"

    @pytest.mark.asyncio
    async def test_empty_name_applies_nothing(self, unit_env):
        service = await unit_env.get(ProfileService)
        repo = await unit_env.get(ProfileRepository)
        await repo.save(Profile(name="standard", default=True))

        assert await service.resolve("") is None

    @pytest.mark.asyncio
    async def test_deleted_profile_falls_back_to_default(self, unit_env):
        service = await unit_env.get(ProfileService)
        repo = await unit_env.get(ProfileRepository)
        await repo.save(Profile(name="standard", default=True))

        resolved = await service.resolve("gone")

        assert resolved.name == "standard"

    @pytest.mark.asyncio
    async def test_deleted_profile_without_default(self, unit_env):
        service = await unit_env.get(ProfileService)

        assert await service.resolve("gone") is None


class TestAdministration:
    @pytest.mark.asyncio
    async def test_list_puts_default_first(self, unit_env):
        service = await unit_env.get(ProfileService)
        repo = await unit_env.get(ProfileRepository)
        for name in ("alpha", "beta", "gamma"):
            await repo.save(Profile(name=name))
        await service.set_default("gamma")

        profiles = await service.list_profiles()

        assert [p.name for p in profiles] == ["gamma", "alpha", "beta"]

    @pytest.mark.asyncio
    async def test_set_default_unknown(self, unit_env):
        service = await unit_env.get(ProfileService)

        with pytest.raises(NotFoundError):
            await service.set_default("missing")

    @pytest.mark.asyncio
    async def test_delete_unknown(self, unit_env):
        service = await unit_env.get(ProfileService)

        with pytest.raises(NotFoundError):
            await service.delete("missing")

    @pytest.mark.asyncio
    async def test_create_from_account(self, unit_env):
        service = await unit_env.get(ProfileService)
        client = await unit_env.get(AccountClient)
        account = await new_account(unit_env, "template")
        await client.set_policy(account.id, {"MaxActiveSessions": 2})
        await client.set_configuration(account.id, {"PlayDefaultAudioTrack": True})
        await client.set_display_preferences(account.id, {"CustomPrefs": {}})

        without_home = await service.create_from_account("basic", account.id)
        with_home = await service.create_from_account("home", account.id, homescreen=True)

        assert without_home.policy == {"MaxActiveSessions": 2}
        assert without_home.from_account == "template"
        assert not without_home.has_homescreen
        assert with_home.configuration == {"PlayDefaultAudioTrack": True}
        assert with_home.display_preferences == {"CustomPrefs": {}}

    @pytest.mark.asyncio
    async def test_create_from_missing_account(self, unit_env):
        service = await unit_env.get(ProfileService)

        with pytest.raises(ExternalServiceError):
            await service.create_from_account("x", AccountId("missing"))

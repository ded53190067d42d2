"""Unit tests for the profile use cases."""

import pytest
from pydantic import ValidationError

from enroll.application.usecase.profile import (
    CreateProfileRequest,
    CreateProfileUseCase,
    DeleteProfileRequest,
    DeleteProfileUseCase,
    ListProfilesUseCase,
    SetDefaultProfileRequest,
    SetDefaultProfileUseCase,
)
from enroll.config import Settings
from enroll.domain.error import NotFoundError
from enroll.domain.service import AccountClient, CompanionClient
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def template_account(unit_env):
    client = await unit_env.get(AccountClient)
    account = await client.create_account("template", "pw")
    await client.set_policy(account.id, {"EnableDownloads": False})
    await client.set_configuration(account.id, {"SubtitleMode": "Smart"})
    await client.set_display_preferences(account.id, {"CustomPrefs": {"home0": "resume"}})
    return account


class TestCreateProfile:
    @pytest.mark.asyncio
    async def test_from_account(self, unit_env):
        account = await template_account(unit_env)
        use_case = await unit_env.get(CreateProfileUseCase)

        item = await use_case.execute(
            CreateProfileRequest(name="  basic ", account_id=account.id, homescreen=True)
        )

        assert item.name == "basic"
        assert item.from_account == "template"
        assert item.policy
        assert item.homescreen
        assert not item.companion

    @pytest.mark.asyncio
    async def test_with_companion_template(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.companion.enabled = True
        companion = await unit_env.get(CompanionClient)
        companion.users["7"] = {"id": 7, "userName": "Template", "movieRequestLimit": 3}
        account = await template_account(unit_env)
        use_case = await unit_env.get(CreateProfileUseCase)

        item = await use_case.execute(
            CreateProfileRequest(
                name="basic", account_id=account.id, companion_user="template"
            )
        )

        assert item.companion

    @pytest.mark.asyncio
    async def test_unknown_companion_user(self, unit_env):
        settings = await unit_env.get(Settings)
        settings.companion.enabled = True
        account = await template_account(unit_env)
        use_case = await unit_env.get(CreateProfileUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateProfileRequest(name="basic", account_id=account.id, companion_user="x")
            )

    def test_blank_name(self):
        with pytest.raises(ValidationError):
            CreateProfileRequest(name="   ", account_id="a")


class TestProfileAdministration:
    @pytest.mark.asyncio
    async def test_default_then_delete(self, unit_env):
        account = await template_account(unit_env)
        create = await unit_env.get(CreateProfileUseCase)
        for name in ("alpha", "beta"):
            await create.execute(CreateProfileRequest(name=name, account_id=account.id))
        set_default = await unit_env.get(SetDefaultProfileUseCase)
        delete = await unit_env.get(DeleteProfileUseCase)
        list_profiles = await unit_env.get(ListProfilesUseCase)

        await set_default.execute(SetDefaultProfileRequest(name="beta"))
        listed = await list_profiles.execute()

        assert [(p.name, p.default) for p in listed.profiles] == [
            ("beta", True),
            ("alpha", False),
        ]

        await delete.execute(DeleteProfileRequest(name="beta"))
        listed = await list_profiles.execute()

        assert [p.name for p in listed.profiles] == ["alpha"]

    @pytest.mark.asyncio
    async def test_unknown_names(self, unit_env):
        set_default = await unit_env.get(SetDefaultProfileUseCase)
        delete = await unit_env.get(DeleteProfileUseCase)

        with pytest.raises(NotFoundError):
            await set_default.execute(SetDefaultProfileRequest(name="missing"))
        with pytest.raises(NotFoundError):
            await delete.execute(DeleteProfileRequest(name="missing"))

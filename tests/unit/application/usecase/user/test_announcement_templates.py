"""Unit tests for the announcement template use cases."""

import pytest

from enroll.application.usecase.user import (
    AnnouncementTemplateRequest,
    DeleteAnnouncementTemplateUseCase,
    GetAnnouncementTemplateUseCase,
    ListAnnouncementTemplatesUseCase,
    SaveAnnouncementTemplateUseCase,
)
from enroll.domain.error import NotFoundError
from enroll.domain.model import AnnouncementTemplate
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def template(name: str = "maintenance", **kwargs) -> AnnouncementTemplate:
    fields = {"subject": "Downtime tonight", "body": "Hi {{ username }}, back soon."}
    fields.update(kwargs)
    return AnnouncementTemplate(name=name, **fields)


class TestAnnouncementTemplates:
    @pytest.mark.asyncio
    async def test_save_then_get(self, unit_env):
        save = await unit_env.get(SaveAnnouncementTemplateUseCase)
        get = await unit_env.get(GetAnnouncementTemplateUseCase)

        await save.execute(template())
        found = await get.execute(AnnouncementTemplateRequest(name="maintenance"))

        assert found.subject == "Downtime tonight"
        assert found.body == "Hi {{ username }}, back soon."

    @pytest.mark.asyncio
    async def test_save_overwrites_same_name(self, unit_env):
        save = await unit_env.get(SaveAnnouncementTemplateUseCase)
        get = await unit_env.get(GetAnnouncementTemplateUseCase)

        await save.execute(template())
        await save.execute(template(subject="Rescheduled"))
        found = await get.execute(AnnouncementTemplateRequest(name="maintenance"))

        assert found.subject == "Rescheduled"

    @pytest.mark.asyncio
    async def test_list_names_sorted(self, unit_env):
        save = await unit_env.get(SaveAnnouncementTemplateUseCase)
        list_templates = await unit_env.get(ListAnnouncementTemplatesUseCase)
        await save.execute(template("welcome-back"))
        await save.execute(template("maintenance"))

        response = await list_templates.execute()

        assert response.names == ["maintenance", "welcome-back"]

    @pytest.mark.asyncio
    async def test_invalid_body_not_saved(self, unit_env):
        save = await unit_env.get(SaveAnnouncementTemplateUseCase)
        list_templates = await unit_env.get(ListAnnouncementTemplatesUseCase)

        with pytest.raises(ValueError):
            await save.execute(template(body="{% for %}"))

        assert (await list_templates.execute()).names == []

    @pytest.mark.asyncio
    async def test_delete(self, unit_env):
        save = await unit_env.get(SaveAnnouncementTemplateUseCase)
        get = await unit_env.get(GetAnnouncementTemplateUseCase)
        delete = await unit_env.get(DeleteAnnouncementTemplateUseCase)
        await save.execute(template())

        await delete.execute(AnnouncementTemplateRequest(name="maintenance"))

        with pytest.raises(NotFoundError):
            await get.execute(AnnouncementTemplateRequest(name="maintenance"))
        with pytest.raises(NotFoundError):
            await delete.execute(AnnouncementTemplateRequest(name="maintenance"))

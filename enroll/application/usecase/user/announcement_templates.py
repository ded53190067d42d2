"""Announcement template use cases."""

from pydantic import BaseModel

from enroll.application.usecase.base import BaseUseCase
from enroll.domain.model import AnnouncementTemplate
from enroll.domain.service import AnnouncementService


class AnnouncementTemplateRequest(BaseModel):
    name: str


class ListAnnouncementTemplatesResponse(BaseModel):
    names: list[str]


class SaveAnnouncementTemplateUseCase(BaseUseCase):
    """Use case for saving an announcement under a name.

    Saving an existing name overwrites it.
    """

    def __init__(self, announcement_service: AnnouncementService) -> None:
        self.announcement_service = announcement_service

    async def execute(self, request: AnnouncementTemplate) -> AnnouncementTemplate:
        """Raises ValueError if the body is not a valid template."""
        return await self.announcement_service.save(request)


class ListAnnouncementTemplatesUseCase(BaseUseCase):
    def __init__(self, announcement_service: AnnouncementService) -> None:
        self.announcement_service = announcement_service

    async def execute(self, request: None = None) -> ListAnnouncementTemplatesResponse:
        return ListAnnouncementTemplatesResponse(names=await self.announcement_service.names())


class GetAnnouncementTemplateUseCase(BaseUseCase):
    def __init__(self, announcement_service: AnnouncementService) -> None:
        self.announcement_service = announcement_service

    async def execute(self, request: AnnouncementTemplateRequest) -> AnnouncementTemplate:
        """Raises NotFoundError for an unknown name."""
        return await self.announcement_service.get(request.name)


class DeleteAnnouncementTemplateUseCase(BaseUseCase):
    def __init__(self, announcement_service: AnnouncementService) -> None:
        self.announcement_service = announcement_service

    async def execute(self, request: AnnouncementTemplateRequest) -> None:
        """Raises NotFoundError for an unknown name."""
        await self.announcement_service.delete(request.name)

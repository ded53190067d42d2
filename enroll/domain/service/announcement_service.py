"""Announcement template domain service."""

import logfire

from enroll.domain.error import NotFoundError
from enroll.domain.model.announcement_template import AnnouncementTemplate
from enroll.domain.repository import AnnouncementTemplateRepository

from .base import Service
from .message_service import MessageService


class AnnouncementService(Service):
    """Saved announcements."""

    def __init__(
        self,
        template_repository: AnnouncementTemplateRepository,
        message_service: MessageService,
    ) -> None:
        """Initialize announcement service.

        Args:
            template_repository: Template storage
            message_service: Used to check a body renders before saving it
        """
        self.template_repository = template_repository
        self.message_service = message_service

    async def save(self, template: AnnouncementTemplate) -> AnnouncementTemplate:
        """Store a template under its name, replacing an older one.

        Raises:
            ValueError: If the body is not a valid template
        """
        self.message_service.announcement(template.subject, template.body, "")
        saved = await self.template_repository.save(template)
        logfire.info("Announcement template saved", name=template.name)
        return saved

    async def names(self) -> list[str]:
        return [template.name for template in await self.template_repository.find_all()]

    async def get(self, name: str) -> AnnouncementTemplate:
        """Raises NotFoundError if no template has this name."""
        template = await self.template_repository.find_by_name(name)
        if template is None:
            raise NotFoundError("Announcement template", name)
        return template

    async def delete(self, name: str) -> None:
        """Raises NotFoundError if no template has this name."""
        if not await self.template_repository.delete(name):
            raise NotFoundError("Announcement template", name)
        logfire.info("Announcement template deleted", name=name)

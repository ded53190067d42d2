"""Announcement template repository interface."""

from abc import ABC, abstractmethod

from enroll.domain.model.announcement_template import AnnouncementTemplate


class AnnouncementTemplateRepository(ABC):
    """Repository for saved announcements, keyed by name."""

    @abstractmethod
    async def save(self, template: AnnouncementTemplate) -> AnnouncementTemplate:
        """Store a template, replacing any with the same name."""
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> AnnouncementTemplate | None:
        pass

    @abstractmethod
    async def find_all(self) -> list[AnnouncementTemplate]:
        """Return every template, ordered by name."""
        pass

    @abstractmethod
    async def delete(self, name: str) -> bool:
        pass

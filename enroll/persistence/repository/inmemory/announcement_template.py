"""In-memory announcement template repository for testing."""

from typing import Optional

from enroll.domain.model.announcement_template import AnnouncementTemplate
from enroll.domain.repository.announcement_template import AnnouncementTemplateRepository


class InMemoryAnnouncementTemplateRepository(AnnouncementTemplateRepository):
    def __init__(self) -> None:
        self._templates: dict[str, AnnouncementTemplate] = {}

    async def save(self, template: AnnouncementTemplate) -> AnnouncementTemplate:
        self._templates[template.name] = template
        return template

    async def find_by_name(self, name: str) -> Optional[AnnouncementTemplate]:
        return self._templates.get(name)

    async def find_all(self) -> list[AnnouncementTemplate]:
        return [self._templates[name] for name in sorted(self._templates)]

    async def delete(self, name: str) -> bool:
        return self._templates.pop(name, None) is not None

"""PostgreSQL implementation of AnnouncementTemplate repository."""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from enroll.domain.model import AnnouncementTemplate
from enroll.domain.repository import AnnouncementTemplateRepository
from enroll.persistence.tables import announcement_templates_table


class PostgresAnnouncementTemplateRepository(AnnouncementTemplateRepository):
    """PostgreSQL implementation of AnnouncementTemplateRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, template: AnnouncementTemplate) -> AnnouncementTemplate:
        stmt = insert(announcement_templates_table).values(**template.model_dump())
        stmt = stmt.on_conflict_do_update(
            index_elements=[announcement_templates_table.c.name],
            set_={"subject": template.subject, "body": template.body},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return template

    async def find_by_name(self, name: str) -> Optional[AnnouncementTemplate]:
        stmt = select(announcement_templates_table).where(
            announcement_templates_table.c.name == name
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return AnnouncementTemplate(**dict(row)) if row else None

    async def find_all(self) -> list[AnnouncementTemplate]:
        stmt = select(announcement_templates_table).order_by(announcement_templates_table.c.name)
        result = await self.session.execute(stmt)
        return [AnnouncementTemplate(**dict(row)) for row in result.mappings().all()]

    async def delete(self, name: str) -> bool:
        stmt = delete(announcement_templates_table).where(
            announcement_templates_table.c.name == name
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

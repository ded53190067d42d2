"""PostgreSQL implementation of Profile repository."""

from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from enroll.domain.model import Profile
from enroll.domain.repository import ProfileRepository
from enroll.persistence.mappers import profile_to_dict, row_to_profile
from enroll.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_name(self, name: str) -> Optional[Profile]:
        stmt = select(profiles_table).where(profiles_table.c.name == name)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_default(self) -> Optional[Profile]:
        stmt = select(profiles_table).where(profiles_table.c.is_default.is_(True))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_all(self) -> list[Profile]:
        stmt = select(profiles_table).order_by(profiles_table.c.name)
        result = await self.session.execute(stmt)
        return [row_to_profile(dict(row)) for row in result.mappings().all()]

    async def save(self, profile: Profile) -> Profile:
        values = profile_to_dict(profile)
        stmt = insert(profiles_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[profiles_table.c.name],
            set_={k: v for k, v in values.items() if k != "name"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return profile

    async def set_default(self, name: str) -> bool:
        if await self.find_by_name(name) is None:
            return False
        await self.session.execute(
            update(profiles_table).values(is_default=profiles_table.c.name == name)
        )
        await self.session.flush()
        return True

    async def delete(self, name: str) -> bool:
        stmt = delete(profiles_table).where(profiles_table.c.name == name)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

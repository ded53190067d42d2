"""PostgreSQL implementation of AccountExpiry repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from enroll.domain.repository import AccountExpiryRepository
from enroll.domain.value import AccountId
from enroll.persistence.tables import account_expiries_table


class PostgresAccountExpiryRepository(AccountExpiryRepository):
    """PostgreSQL implementation of AccountExpiryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def set(self, account_id: AccountId, expiry: datetime) -> None:
        stmt = insert(account_expiries_table).values(account_id=account_id, expiry=expiry)
        stmt = stmt.on_conflict_do_update(
            index_elements=[account_expiries_table.c.account_id],
            set_={"expiry": expiry},
        )
        async with self.session.begin_nested():
            await self.session.execute(stmt)

    async def get(self, account_id: AccountId) -> Optional[datetime]:
        stmt = select(account_expiries_table.c.expiry).where(
            account_expiries_table.c.account_id == account_id
        )
        result = await self.session.execute(stmt)
        return result.scalar()

    async def delete(self, account_id: AccountId) -> bool:
        stmt = delete(account_expiries_table).where(
            account_expiries_table.c.account_id == account_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

"""PostgreSQL implementation of EmailAddress repository."""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from enroll.domain.model import EmailAddress
from enroll.domain.repository import EmailAddressRepository
from enroll.domain.value import AccountId
from enroll.persistence.mappers import row_to_email_address
from enroll.persistence.tables import email_addresses_table


class PostgresEmailAddressRepository(EmailAddressRepository):
    """PostgreSQL implementation of EmailAddressRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, email: EmailAddress) -> EmailAddress:
        stmt = insert(email_addresses_table).values(**email.model_dump())
        stmt = stmt.on_conflict_do_update(
            index_elements=[email_addresses_table.c.account_id],
            set_={"address": email.address, "contact": email.contact},
        )
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return email

    async def find_by_account(self, account_id: AccountId) -> Optional[EmailAddress]:
        stmt = select(email_addresses_table).where(
            email_addresses_table.c.account_id == account_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_email_address(dict(row)) if row else None

    async def delete(self, account_id: AccountId) -> bool:
        stmt = delete(email_addresses_table).where(
            email_addresses_table.c.account_id == account_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

"""PostgreSQL implementation of LinkedIdentity repository."""

from typing import Optional

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from enroll.domain.model import LinkedIdentity
from enroll.domain.repository import LinkedIdentityRepository
from enroll.domain.value import VERIFICATION_ORDER, AccountId, Platform
from enroll.persistence.mappers import linked_identity_to_dict, row_to_linked_identity
from enroll.persistence.tables import linked_identities_table


class PostgresLinkedIdentityRepository(LinkedIdentityRepository):
    """PostgreSQL implementation of LinkedIdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, identity: LinkedIdentity) -> LinkedIdentity:
        values = linked_identity_to_dict(identity)
        stmt = insert(linked_identities_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[
                linked_identities_table.c.account_id,
                linked_identities_table.c.platform,
            ],
            set_={
                k: v for k, v in values.items() if k not in ("account_id", "platform")
            },
        )
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return identity

    async def find(
        self, account_id: AccountId, platform: Platform
    ) -> Optional[LinkedIdentity]:
        stmt = select(linked_identities_table).where(
            and_(
                linked_identities_table.c.account_id == account_id,
                linked_identities_table.c.platform == platform.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_linked_identity(dict(row)) if row else None

    async def find_by_account(self, account_id: AccountId) -> list[LinkedIdentity]:
        stmt = select(linked_identities_table).where(
            linked_identities_table.c.account_id == account_id
        )
        result = await self.session.execute(stmt)
        identities = [row_to_linked_identity(dict(row)) for row in result.mappings().all()]
        return sorted(identities, key=lambda i: VERIFICATION_ORDER.index(i.platform))

    async def delete(self, account_id: AccountId, platform: Platform) -> bool:
        stmt = delete(linked_identities_table).where(
            and_(
                linked_identities_table.c.account_id == account_id,
                linked_identities_table.c.platform == platform.value,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

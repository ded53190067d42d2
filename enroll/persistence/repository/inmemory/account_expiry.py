"""In-memory account expiry repository for testing."""

import asyncio
from datetime import datetime
from typing import Optional

from enroll.domain.repository.account_expiry import AccountExpiryRepository
from enroll.domain.value import AccountId


class InMemoryAccountExpiryRepository(AccountExpiryRepository):
    """In-memory implementation of AccountExpiryRepository.

    Guarded by its own lock, independent of the invite store.
    """

    def __init__(self) -> None:
        self._expiries: dict[AccountId, datetime] = {}
        self._lock = asyncio.Lock()

    async def set(self, account_id: AccountId, expiry: datetime) -> None:
        async with self._lock:
            self._expiries[account_id] = expiry

    async def get(self, account_id: AccountId) -> Optional[datetime]:
        return self._expiries.get(account_id)

    async def delete(self, account_id: AccountId) -> bool:
        async with self._lock:
            return self._expiries.pop(account_id, None) is not None

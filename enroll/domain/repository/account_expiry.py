"""Account expiry repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from enroll.domain.value import AccountId


class AccountExpiryRepository(ABC):
    """Repository for per-account expiry timestamps.

    Distinct from invite storage and guarded independently. Implementations
    hold their lock only around the write itself.
    """

    @abstractmethod
    async def set(self, account_id: AccountId, expiry: datetime) -> None:
        pass

    @abstractmethod
    async def get(self, account_id: AccountId) -> datetime | None:
        pass

    @abstractmethod
    async def delete(self, account_id: AccountId) -> bool:
        pass

"""Linked identity repository interface."""

from abc import ABC, abstractmethod

from enroll.domain.model.linked_identity import LinkedIdentity
from enroll.domain.value import AccountId, Platform


class LinkedIdentityRepository(ABC):
    """Repository for account to chat identity links."""

    @abstractmethod
    async def save(self, identity: LinkedIdentity) -> LinkedIdentity:
        """Create or replace the link for (account, platform)."""
        pass

    @abstractmethod
    async def find(self, account_id: AccountId, platform: Platform) -> LinkedIdentity | None:
        pass

    @abstractmethod
    async def find_by_account(self, account_id: AccountId) -> list[LinkedIdentity]:
        """All links of one account, in platform verification order."""
        pass

    @abstractmethod
    async def delete(self, account_id: AccountId, platform: Platform) -> bool:
        pass

"""Email address repository interface."""

from abc import ABC, abstractmethod

from enroll.domain.model.email_address import EmailAddress
from enroll.domain.value import AccountId


class EmailAddressRepository(ABC):
    """Repository for account contact addresses."""

    @abstractmethod
    async def save(self, email: EmailAddress) -> EmailAddress:
        pass

    @abstractmethod
    async def find_by_account(self, account_id: AccountId) -> EmailAddress | None:
        pass

    @abstractmethod
    async def delete(self, account_id: AccountId) -> bool:
        pass

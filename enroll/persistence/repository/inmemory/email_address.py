"""In-memory email address repository for testing."""

from typing import Optional

from enroll.domain.model.email_address import EmailAddress
from enroll.domain.repository.email_address import EmailAddressRepository
from enroll.domain.value import AccountId


class InMemoryEmailAddressRepository(EmailAddressRepository):
    """In-memory implementation of EmailAddressRepository for testing."""

    def __init__(self) -> None:
        self._emails: dict[AccountId, EmailAddress] = {}

    async def save(self, email: EmailAddress) -> EmailAddress:
        self._emails[email.account_id] = email
        return email

    async def find_by_account(self, account_id: AccountId) -> Optional[EmailAddress]:
        return self._emails.get(account_id)

    async def delete(self, account_id: AccountId) -> bool:
        return self._emails.pop(account_id, None) is not None

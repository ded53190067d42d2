"""Account domain service."""

from datetime import datetime

import logfire

from enroll.domain.error import AccountCreationFailedError, ExternalServiceError
from enroll.domain.model.account import Account
from enroll.domain.model.email_address import EmailAddress
from enroll.domain.model.linked_identity import LinkedIdentity
from enroll.domain.repository import (
    AccountExpiryRepository,
    EmailAddressRepository,
    LinkedIdentityRepository,
)
from enroll.domain.service.clients import AccountClient
from enroll.domain.value import AccountId, DurationOffset, Platform, VerifiedIdentity

from .base import Service


class AccountService(Service):
    """Media server accounts and the records this service keeps about them."""

    def __init__(
        self,
        account_client: AccountClient,
        email_repository: EmailAddressRepository,
        identity_repository: LinkedIdentityRepository,
        expiry_repository: AccountExpiryRepository,
    ) -> None:
        """Initialize account service.

        Args:
            account_client: Media server account service
            email_repository: Contact address storage
            identity_repository: Linked chat identity storage
            expiry_repository: Account expiry storage
        """
        self.account_client = account_client
        self.email_repository = email_repository
        self.identity_repository = identity_repository
        self.expiry_repository = expiry_repository

    async def exists(self, name: str) -> bool:
        """Whether an account with this name already exists.

        Raises:
            ExternalServiceError: If the account service cannot be reached
        """
        return await self.account_client.get_account_by_name(name) is not None

    async def create(self, name: str, password: str) -> Account:
        """Create a media server account.

        Raises:
            AccountCreationFailedError: If the account service refuses
        """
        with logfire.span("account_service.create", username=name):
            try:
                account = await self.account_client.create_account(name, password)
            except ExternalServiceError as e:
                logfire.error(
                    "Failed to create account",
                    username=name,
                    status_code=e.status_code,
                    error=str(e),
                )
                raise AccountCreationFailedError(f"Failed to create user {name}: {e}") from e
            logfire.info("Account created", username=name, account_id=account.id)
            return account

    async def get(self, account_id: AccountId) -> Account:
        """Raises ExternalServiceError if the account cannot be fetched."""
        return await self.account_client.get_account(account_id)

    async def record_email(
        self, account_id: AccountId, address: str, contact: bool = True
    ) -> EmailAddress:
        return await self.email_repository.save(
            EmailAddress(account_id=account_id, address=address, contact=contact)
        )

    async def set_expiry(
        self, account_id: AccountId, offset: DurationOffset | None, now: datetime
    ) -> datetime | None:
        """Store ``now + offset`` as the account's expiry, if an offset is set."""
        if offset is None or offset.is_zero:
            return None
        expiry = offset.apply(now)
        await self.expiry_repository.set(account_id, expiry)
        logfire.info(
            "Account expiry set", account_id=account_id, expiry=expiry.isoformat()
        )
        return expiry

    async def get_expiry(self, account_id: AccountId) -> datetime | None:
        return await self.expiry_repository.get(account_id)

    async def link_identity(
        self, account_id: AccountId, identity: VerifiedIdentity, contact: bool = True
    ) -> LinkedIdentity:
        """Persist (or replace) the account's link to a chat identity."""
        link = LinkedIdentity(
            account_id=account_id,
            platform=identity.platform,
            user_id=identity.user_id,
            display_name=identity.display_name,
            channel_id=identity.channel_id,
            contact=contact,
            lang=identity.lang,
        )
        saved = await self.identity_repository.save(link)
        logfire.info(
            "Identity linked",
            account_id=account_id,
            platform=identity.platform.value,
            user_id=identity.user_id,
        )
        return saved

    async def identities(self, account_id: AccountId) -> list[LinkedIdentity]:
        return await self.identity_repository.find_by_account(account_id)

    async def unlink_identity(self, account_id: AccountId, platform: Platform) -> bool:
        return await self.identity_repository.delete(account_id, platform)

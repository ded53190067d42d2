"""Notification dispatch domain service."""

import asyncio

import logfire

from enroll.config import EmailSettings, Settings
from enroll.domain.error import ExternalServiceError
from enroll.domain.repository import EmailAddressRepository, LinkedIdentityRepository
from enroll.domain.service.clients import ChatClient, EmailSender
from enroll.domain.value import AccountId, DeliveryReport, Message, Platform

from .base import Service

NO_CONTACT = "no contact method"


class NotificationService(Service):
    """Delivers messages over every channel an account can be reached on.

    Recipients are independent: each delivery runs as its own task and one
    failure never stops the others. Callers get a ``DeliveryReport`` back
    instead of an exception.
    """

    def __init__(
        self,
        settings: Settings,
        email_sender: EmailSender,
        chat_clients: dict[Platform, ChatClient],
        email_repository: EmailAddressRepository,
        identity_repository: LinkedIdentityRepository,
    ) -> None:
        """Initialize notification service.

        Args:
            settings: Application settings (email and platform switches)
            email_sender: Mail transport
            chat_clients: Chat transport per platform
            email_repository: Contact address lookup
            identity_repository: Linked chat identity lookup
        """
        self.settings = settings
        self.email_sender = email_sender
        self.chat_clients = chat_clients
        self.email_repository = email_repository
        self.identity_repository = identity_repository

    @property
    def email_settings(self) -> EmailSettings:
        return self.settings.email

    def platform_enabled(self, platform: Platform) -> bool:
        return getattr(self.settings, platform.value).enabled

    async def targets(self, account_id: AccountId) -> list[tuple[str, str]]:
        """Resolve an account to (channel, destination) pairs.

        The channel is ``"email"`` or a platform name.
        """
        targets: list[tuple[str, str]] = []
        if self.email_settings.enabled:
            email = await self.email_repository.find_by_account(account_id)
            if email and email.contact and email.address:
                targets.append(("email", email.address))

        for identity in await self.identity_repository.find_by_account(account_id):
            if not identity.contact or not self.platform_enabled(identity.platform):
                continue
            if identity.platform not in self.chat_clients:
                continue
            targets.append((identity.platform.value, identity.destination))
        return targets

    async def _deliver(self, message: Message, channel: str, destination: str) -> None:
        if channel == "email":
            await self.email_sender.send(message, destination)
        else:
            await self.chat_clients[Platform(channel)].send_message(message, destination)

    async def _dispatch(
        self, message: Message, targets: list[tuple[str, str]]
    ) -> DeliveryReport:
        results = await asyncio.gather(
            *(self._deliver(message, channel, dest) for channel, dest in targets),
            return_exceptions=True,
        )

        delivered: list[str] = []
        failures: dict[str, str] = {}
        for (channel, destination), result in zip(targets, results):
            label = f"{channel}:{destination}"
            if isinstance(result, ExternalServiceError):
                failures[label] = str(result)
                logfire.warn(
                    "Message delivery failed",
                    channel=channel,
                    destination=destination,
                    error=str(result),
                )
            elif isinstance(result, BaseException):
                raise result
            else:
                delivered.append(label)
        return DeliveryReport(delivered=tuple(delivered), failures=failures)

    async def send_to_account(self, message: Message, account_id: AccountId) -> DeliveryReport:
        """Send a message over every contact channel of an account."""
        with logfire.span("notification_service.send_to_account", account_id=account_id):
            targets = await self.targets(account_id)
            if not targets:
                logfire.warn("No contact method for account", account_id=account_id)
                return DeliveryReport(failures={account_id: NO_CONTACT})
            return await self._dispatch(message, targets)

    async def send_to_accounts(
        self, messages: dict[AccountId, Message]
    ) -> DeliveryReport:
        """Send one (possibly personalised) message per account, concurrently."""
        reports = await asyncio.gather(
            *(self.send_to_account(message, account_id) for account_id, message in messages.items())
        )
        report = DeliveryReport()
        for item in reports:
            report = report.merge(item)
        return report

    async def send_to_address(self, message: Message, address: str) -> DeliveryReport:
        """Send to an email address (contains ``@``) or an account id."""
        if "@" in address:
            if not self.email_settings.enabled:
                return DeliveryReport(failures={address: "email disabled"})
            return await self._dispatch(message, [("email", address)])
        return await self.send_to_account(message, AccountId(address))

    async def send_to_addresses(
        self, message: Message, addresses: list[str]
    ) -> DeliveryReport:
        reports = await asyncio.gather(
            *(self.send_to_address(message, address) for address in addresses)
        )
        report = DeliveryReport()
        for item in reports:
            report = report.merge(item)
        return report

    async def send_to_platform(
        self, message: Message, platform: Platform, destination: str
    ) -> DeliveryReport:
        """Send directly to a chat destination that is not linked to an account."""
        if platform not in self.chat_clients or not self.platform_enabled(platform):
            return DeliveryReport(failures={destination: f"{platform.value} disabled"})
        return await self._dispatch(message, [(platform.value, destination)])

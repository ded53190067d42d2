"""Chat platform verification domain services.

Each platform gets a ``Verifier`` with the same contract (issue, mark,
check, consume). Provisioning iterates them in a fixed order instead of
branching per platform.
"""

import secrets
from typing import ClassVar

import logfire

from enroll.config import DiscordSettings, MatrixSettings, PlatformSettings, TelegramSettings
from enroll.domain.model.pending_verification import PendingVerification
from enroll.domain.repository import VerificationRegistry
from enroll.domain.service.clients import (
    ChatClient,
    DiscordClient,
    MatrixClient,
    TelegramClient,
)
from enroll.domain.value import Platform, VerificationPIN, VerifiedIdentity

from .base import Service
from .message_service import MessageService


def generate_pin() -> VerificationPIN:
    """Six random digits, formatted ``123-456``."""
    digits = f"{secrets.randbelow(1_000_000):06d}"
    return VerificationPIN(f"{digits[:3]}-{digits[3:]}")


class Verifier(Service):
    """Verification registry front for one chat platform."""

    platform: ClassVar[Platform]

    def __init__(
        self,
        registry: VerificationRegistry,
        settings: PlatformSettings,
        client: ChatClient,
    ) -> None:
        """Initialize verifier.

        Args:
            registry: PIN map for this platform
            settings: Platform switches, read on every call
            client: Chat transport for this platform
        """
        self.registry = registry
        self.settings = settings
        self.client = client

    @property
    def enabled(self) -> bool:
        return self.settings.enabled

    @property
    def required(self) -> bool:
        return self.settings.enabled and self.settings.required

    async def issue_token(
        self, context: str = "", identity: VerifiedIdentity | None = None
    ) -> VerificationPIN:
        """Register a fresh PIN for this platform.

        Args:
            context: Platform session context stored with the PIN
            identity: Identity already known at issue time, still unverified

        Returns:
            The new PIN
        """
        while True:
            pin = generate_pin()
            entry = PendingVerification(
                pin=pin, platform=self.platform, context=context, identity=identity
            )
            if await self.registry.add(entry):
                logfire.debug("Verification PIN issued", platform=self.platform.value)
                return pin

    async def mark_verified(self, pin: VerificationPIN, identity: VerifiedIdentity) -> bool:
        """Attach a proven identity to a PIN (inbound platform callback)."""
        marked = await self.registry.mark_verified(pin, identity)
        if marked:
            logfire.info(
                "Verification PIN verified",
                platform=self.platform.value,
                user_id=identity.user_id,
            )
        else:
            logfire.warn("Unknown PIN reported verified", platform=self.platform.value)
        return marked

    async def check_verified(self, pin: VerificationPIN) -> VerifiedIdentity | None:
        """Return the proven identity for a PIN without consuming it."""
        entry = await self.registry.get(pin)
        if entry is None or not entry.verified:
            return None
        return entry.identity

    async def consume(self, pin: VerificationPIN) -> VerifiedIdentity | None:
        """Remove a verified PIN and return its identity.

        At most one caller gets the identity for a given PIN.
        """
        entry = await self.registry.pop_verified(pin)
        if entry is None:
            return None
        logfire.debug("Verification PIN consumed", platform=self.platform.value)
        return entry.identity

    async def after_link(self, identity: VerifiedIdentity) -> VerifiedIdentity:
        """Platform action run once an identity is linked to a new account.

        Returns:
            The identity, possibly with a contact channel filled in

        Raises:
            ExternalServiceError: If the platform call fails
        """
        return identity


class DiscordVerifier(Verifier):
    """Discord: verified by the bot, member role applied after linking."""

    platform = Platform.DISCORD
    settings: DiscordSettings
    client: DiscordClient

    def __init__(
        self,
        registry: VerificationRegistry,
        settings: DiscordSettings,
        client: DiscordClient,
    ) -> None:
        super().__init__(registry, settings, client)

    async def after_link(self, identity: VerifiedIdentity) -> VerifiedIdentity:
        if not identity.channel_id:
            channel = await self.client.open_dm(identity.user_id)
            identity = identity.model_copy(update={"channel_id": channel})
        if self.settings.member_role_id:
            await self.client.apply_role(identity.user_id)
            logfire.info("Discord member role applied", user_id=identity.user_id)
        return identity


class MatrixVerifier(Verifier):
    """Matrix: the PIN is sent into a new DM room with the user."""

    platform = Platform.MATRIX
    settings: MatrixSettings
    client: MatrixClient

    def __init__(
        self,
        registry: VerificationRegistry,
        settings: MatrixSettings,
        client: MatrixClient,
        message_service: MessageService,
    ) -> None:
        super().__init__(registry, settings, client)
        self.message_service = message_service

    async def issue_token(
        self, context: str = "", identity: VerifiedIdentity | None = None
    ) -> VerificationPIN:
        """Create a DM room with ``context`` (a Matrix user id) and send a PIN.

        Raises:
            ExternalServiceError: If the room cannot be created or the PIN
                cannot be sent
        """
        with logfire.span("matrix_verifier.issue_token", user_id=context):
            room = await self.client.create_room(context)
            pending = identity or VerifiedIdentity(
                platform=self.platform,
                user_id=context,
                display_name=context,
                channel_id=room,
            )
            pin = await super().issue_token(context, pending)
            await self.client.send_message(self.message_service.verification_pin(pin), room)
            return pin

    async def confirm(self, pin: VerificationPIN, user_id: str) -> bool:
        """Mark a PIN verified if it was sent to ``user_id``."""
        entry = await self.registry.get(pin)
        if entry is None or entry.context != user_id:
            return False
        identity = entry.identity or VerifiedIdentity(
            platform=self.platform, user_id=user_id, display_name=user_id
        )
        return await self.mark_verified(pin, identity)

    async def after_link(self, identity: VerifiedIdentity) -> VerifiedIdentity:
        if identity.channel_id:
            return identity
        room = await self.client.create_room(identity.user_id)
        logfire.info("Matrix DM room created", user_id=identity.user_id)
        return identity.model_copy(update={"channel_id": room})


class TelegramVerifier(Verifier):
    """Telegram: verified by the bot, which also tracks per-chat language."""

    platform = Platform.TELEGRAM
    settings: TelegramSettings
    client: TelegramClient

    def __init__(
        self,
        registry: VerificationRegistry,
        settings: TelegramSettings,
        client: TelegramClient,
    ) -> None:
        super().__init__(registry, settings, client)

    async def set_language(self, chat_id: str, lang: str) -> None:
        await self.registry.set_language(chat_id, lang)

    async def mark_verified(self, pin: VerificationPIN, identity: VerifiedIdentity) -> bool:
        if identity.lang is None:
            chat_id = identity.channel_id or identity.user_id
            lang = await self.registry.get_language(chat_id)
            identity = identity.model_copy(update={"lang": lang})
        return await super().mark_verified(pin, identity)

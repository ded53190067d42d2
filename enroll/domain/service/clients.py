"""Interfaces of the external collaborators the domain talks to.

Implementations live in ``enroll.adapter``. Every method raises an
``ExternalServiceError`` subclass on failure; a 200 or 204 from the remote
side counts as success.
"""

from typing import Any

from enroll.domain.model.account import Account
from enroll.domain.value import AccountId, Message, Platform, VerifiedIdentity


class AccountClient:
    """Media server account service."""

    async def create_account(self, name: str, password: str) -> Account:
        raise NotImplementedError

    async def get_account(self, account_id: AccountId) -> Account:
        raise NotImplementedError

    async def get_account_by_name(self, name: str) -> Account | None:
        """Look up an account by name, returning None if there is none."""
        raise NotImplementedError

    async def delete_account(self, account_id: AccountId) -> None:
        raise NotImplementedError

    async def set_policy(self, account_id: AccountId, policy: dict[str, Any]) -> None:
        raise NotImplementedError

    async def set_configuration(
        self, account_id: AccountId, configuration: dict[str, Any]
    ) -> None:
        raise NotImplementedError

    async def set_display_preferences(
        self, account_id: AccountId, preferences: dict[str, Any]
    ) -> None:
        raise NotImplementedError

    async def get_display_preferences(self, account_id: AccountId) -> dict[str, Any]:
        raise NotImplementedError

    async def reset_password(self, name: str) -> None:
        """Start the media server's own password reset flow."""
        raise NotImplementedError

    async def set_password(
        self, account_id: AccountId, current: str, new: str
    ) -> None:
        raise NotImplementedError


class CompanionClient:
    """Companion request service (user records keyed by its own ids)."""

    async def list_users(self) -> list[dict[str, Any]]:
        raise NotImplementedError

    async def get_user(self, user_id: str) -> dict[str, Any]:
        raise NotImplementedError

    async def modify_user(self, user: dict[str, Any]) -> None:
        raise NotImplementedError

    async def delete_user(self, user_id: str) -> None:
        raise NotImplementedError

    async def template_by_id(self, user_id: str) -> dict[str, Any]:
        """Return an existing user's settings, usable as a new user template."""
        raise NotImplementedError

    async def create_user(
        self, username: str, password: str, email: str, template: dict[str, Any]
    ) -> None:
        raise NotImplementedError

    async def set_notification_prefs(
        self, user: dict[str, Any], discord_id: str = "", telegram_username: str = ""
    ) -> None:
        raise NotImplementedError


class EmailSender:
    """Outbound mail transport."""

    async def send(self, message: Message, address: str) -> None:
        raise NotImplementedError


class ChatClient:
    """Outbound chat transport for one platform."""

    platform: Platform

    async def send_message(self, message: Message, destination: str) -> None:
        """Send a message to a channel/room/chat id."""
        raise NotImplementedError


class DiscordClient(ChatClient):
    """Discord bot."""

    platform = Platform.DISCORD

    async def open_dm(self, user_id: str) -> str:
        """Return the id of the DM channel with a user."""
        raise NotImplementedError

    async def apply_role(self, user_id: str) -> None:
        """Give a guild member the configured member role."""
        raise NotImplementedError

    async def find_users(self, username: str) -> list[VerifiedIdentity]:
        """Search guild members by username."""
        raise NotImplementedError


class MatrixClient(ChatClient):
    """Matrix bot."""

    platform = Platform.MATRIX

    async def create_room(self, user_id: str) -> str:
        """Create a direct-message room with a user and return its id."""
        raise NotImplementedError


class TelegramClient(ChatClient):
    """Telegram bot."""

    platform = Platform.TELEGRAM

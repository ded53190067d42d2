"""Companion request service domain service."""

from typing import Any

import logfire

from enroll.config import CompanionSettings
from enroll.domain.service.clients import CompanionClient

from .base import Service


class CompanionService(Service):
    """Keeps companion service users in step with linked chat identities."""

    def __init__(self, client: CompanionClient, settings: CompanionSettings) -> None:
        self.client = client
        self.settings = settings

    @property
    def enabled(self) -> bool:
        return self.settings.enabled

    async def find_user(self, username: str) -> dict[str, Any] | None:
        """Find a companion user by (case-insensitive) username."""
        for user in await self.client.list_users():
            if str(user.get("userName", "")).lower() == username.lower():
                return user
        return None

    async def link_notifications(
        self, username: str, discord_id: str = "", telegram_username: str = ""
    ) -> bool:
        """Forward chat handles to the companion user's notification settings.

        Returns:
            False if the companion service is disabled or has no such user

        Raises:
            ExternalServiceError: If the companion service call fails
        """
        if not self.enabled or not (discord_id or telegram_username):
            return False
        user = await self.find_user(username)
        if user is None:
            logfire.warn("Companion user not found", username=username)
            return False
        await self.client.set_notification_prefs(user, discord_id, telegram_username)
        logfire.info(
            "Companion notifications linked",
            username=username,
            discord=bool(discord_id),
            telegram=bool(telegram_username),
        )
        return True

"""Discord bot client (REST API only).

The gateway side of the bot, which watches DMs for PINs, reports back
through the verification callback route.
"""

import logfire

from enroll.adapter.chat import RecordingChat, send_json
from enroll.adapter.error import ChatDeliveryError
from enroll.config import DiscordSettings
from enroll.domain.service.clients import DiscordClient
from enroll.domain.value import Message, Platform, VerifiedIdentity


class DiscordBot(DiscordClient):
    """Base class for Discord clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealDiscordBot(DiscordBot):
    """Discord REST client authenticated as a bot."""

    def __init__(self, settings: DiscordSettings) -> None:
        """Initialize Discord client.

        Args:
            settings: Bot token, guild and member role
        """
        self.settings = settings
        self.api_url = settings.api_url.rstrip("/")

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bot {self.settings.token}"}

    async def send_message(self, message: Message, destination: str) -> None:
        content = message.markdown or message.text
        await send_json(
            "POST",
            f"{self.api_url}/channels/{destination}/messages",
            "discord",
            json={"content": content},
            headers=self.headers,
        )

    async def open_dm(self, user_id: str) -> str:
        response = await send_json(
            "POST",
            f"{self.api_url}/users/@me/channels",
            "discord",
            json={"recipient_id": user_id},
            headers=self.headers,
        )
        return response.json()["id"]

    async def apply_role(self, user_id: str) -> None:
        if not self.settings.member_role_id:
            return
        await send_json(
            "PUT",
            f"{self.api_url}/guilds/{self.settings.guild_id}/members/{user_id}"
            f"/roles/{self.settings.member_role_id}",
            "discord",
            headers=self.headers,
        )

    async def find_users(self, username: str) -> list[VerifiedIdentity]:
        response = await send_json(
            "GET",
            f"{self.api_url}/guilds/{self.settings.guild_id}/members/search",
            "discord",
            headers=self.headers,
            params={"query": username, "limit": 10},
        )
        identities = []
        for member in response.json():
            user = member["user"]
            identities.append(
                VerifiedIdentity(
                    platform=Platform.DISCORD,
                    user_id=user["id"],
                    display_name=member.get("nick") or user.get("username", ""),
                )
            )
        logfire.debug("Discord member search", query=username, matches=len(identities))
        return identities


class MockDiscordBot(RecordingChat, DiscordBot):
    """Mock Discord client for testing."""

    def __init__(self):
        super().__init__()
        self.roles_applied: list[str] = []
        self.members: list[VerifiedIdentity] = []
        self.fail_role = False

    async def open_dm(self, user_id: str) -> str:
        return f"dm-{user_id}"

    async def apply_role(self, user_id: str) -> None:
        if self.fail_role:
            raise ChatDeliveryError("Failed to apply role (mock)", status_code=403)
        self.roles_applied.append(user_id)

    async def find_users(self, username: str) -> list[VerifiedIdentity]:
        return [m for m in self.members if m.display_name.lower() == username.lower()]

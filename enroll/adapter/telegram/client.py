"""Telegram bot client (Bot API)."""

from enroll.adapter.chat import RecordingChat, send_json
from enroll.config import TelegramSettings
from enroll.domain.service.clients import TelegramClient
from enroll.domain.value import Message


class TelegramBot(TelegramClient):
    """Base class for Telegram clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealTelegramBot(TelegramBot):
    """Telegram Bot API client."""

    def __init__(self, settings: TelegramSettings) -> None:
        self.settings = settings

    @property
    def api_url(self) -> str:
        return f"{self.settings.api_url.rstrip('/')}/bot{self.settings.token}"

    async def send_message(self, message: Message, destination: str) -> None:
        await send_json(
            "POST",
            f"{self.api_url}/sendMessage",
            "telegram",
            json={"chat_id": destination, "text": message.text},
        )


class MockTelegramBot(RecordingChat, TelegramBot):
    """Mock Telegram client for testing."""

    pass

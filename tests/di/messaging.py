"""Mock messaging providers for testing."""

from dishka import Scope, provide

from enroll.adapter.discord import MockDiscordBot
from enroll.adapter.email import MockEmailSender
from enroll.adapter.matrix import MockMatrixBot
from enroll.adapter.telegram import MockTelegramBot
from enroll.domain.service import DiscordClient, EmailSender, MatrixClient, TelegramClient
from enroll.util.di.infrastructure.messaging import MessagingProvider


class MockMessagingProvider(MessagingProvider):
    """Transports that record instead of sending."""

    __is_mock__ = True

    scope = Scope.APP

    @provide
    def get_email_sender(self) -> EmailSender:
        return MockEmailSender()

    @provide
    def get_discord_client(self) -> DiscordClient:
        return MockDiscordBot()

    @provide
    def get_matrix_client(self) -> MatrixClient:
        return MockMatrixBot()

    @provide
    def get_telegram_client(self) -> TelegramClient:
        return MockTelegramBot()

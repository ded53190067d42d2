"""Messaging infrastructure providers (mail and chat transports)."""

from dishka import Scope, provide

from enroll.adapter.discord import RealDiscordBot
from enroll.adapter.email import SMTPEmailSender
from enroll.adapter.matrix import RealMatrixBot
from enroll.adapter.telegram import RealTelegramBot
from enroll.config import Settings
from enroll.domain.service import (
    ChatClient,
    DiscordClient,
    EmailSender,
    MatrixClient,
    TelegramClient,
)
from enroll.domain.value import Platform
from enroll.util.di.base import ProviderBase


class MessagingProvider(ProviderBase):
    """Messaging component base."""

    __mock_component__ = "messaging"


class ProdMessagingProvider(MessagingProvider):
    """Production transports: SMTP and the three chat bots."""

    __is_mock__ = False

    scope = Scope.APP

    @provide
    def get_email_sender(self, settings: Settings) -> EmailSender:
        return SMTPEmailSender(settings.email)

    @provide
    def get_discord_client(self, settings: Settings) -> DiscordClient:
        return RealDiscordBot(settings.discord)

    @provide
    def get_matrix_client(self, settings: Settings) -> MatrixClient:
        return RealMatrixBot(settings.matrix)

    @provide
    def get_telegram_client(self, settings: Settings) -> TelegramClient:
        return RealTelegramBot(settings.telegram)


class ChatAggregatorProvider(ProviderBase):
    """Combines the chat transports into a platform-keyed map."""

    scope = Scope.APP

    @provide
    def get_chat_clients(
        self,
        discord_client: DiscordClient,
        matrix_client: MatrixClient,
        telegram_client: TelegramClient,
    ) -> dict[Platform, ChatClient]:
        return {
            Platform.DISCORD: discord_client,
            Platform.MATRIX: matrix_client,
            Platform.TELEGRAM: telegram_client,
        }

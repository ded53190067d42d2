"""Verification DI providers.

Registries hold PINs between requests, so they and the verifiers wrapping
them are APP-scoped.
"""

from dishka import Scope, provide

from enroll.config import Settings
from enroll.domain.service import (
    DiscordClient,
    DiscordVerifier,
    MatrixClient,
    MatrixVerifier,
    MessageService,
    TelegramClient,
    TelegramVerifier,
    Verifier,
)
from enroll.domain.value import Platform
from enroll.persistence.registry import InMemoryVerificationRegistry
from enroll.util.di.base import ProviderBase


class ProdVerificationProvider(ProviderBase):
    """One verifier per chat platform, plus the platform-keyed map."""

    scope = Scope.APP

    @provide
    def get_discord_verifier(self, settings: Settings, client: DiscordClient) -> DiscordVerifier:
        return DiscordVerifier(
            registry=InMemoryVerificationRegistry(Platform.DISCORD),
            settings=settings.discord,
            client=client,
        )

    @provide
    def get_matrix_verifier(
        self,
        settings: Settings,
        client: MatrixClient,
        message_service: MessageService,
    ) -> MatrixVerifier:
        return MatrixVerifier(
            registry=InMemoryVerificationRegistry(Platform.MATRIX),
            settings=settings.matrix,
            client=client,
            message_service=message_service,
        )

    @provide
    def get_telegram_verifier(
        self, settings: Settings, client: TelegramClient
    ) -> TelegramVerifier:
        return TelegramVerifier(
            registry=InMemoryVerificationRegistry(Platform.TELEGRAM),
            settings=settings.telegram,
            client=client,
        )

    @provide
    def get_verifiers(
        self,
        discord: DiscordVerifier,
        matrix: MatrixVerifier,
        telegram: TelegramVerifier,
    ) -> dict[Platform, Verifier]:
        """Provide verifiers keyed by platform.

        Disabled platforms are still present; callers check ``enabled``.
        """
        return {
            Platform.DISCORD: discord,
            Platform.MATRIX: matrix,
            Platform.TELEGRAM: telegram,
        }

"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from enroll.config import EmailConfirmationSettings, MessagesSettings, Settings
from enroll.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings, loaded once from the environment and ``.env``."""

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_confirmation_settings(self, settings: Settings) -> EmailConfirmationSettings:
        return settings.email_confirmation

    @provide
    def provide_messages_settings(self, settings: Settings) -> MessagesSettings:
        return settings.messages

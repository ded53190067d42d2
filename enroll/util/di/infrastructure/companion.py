"""Companion request service infrastructure providers."""

from dishka import Scope, provide

from enroll.adapter.companion import RealCompanionClient
from enroll.config import Settings
from enroll.domain.service import CompanionClient
from enroll.util.di.base import ProviderBase


class CompanionProvider(ProviderBase):
    """Companion component base."""

    __mock_component__ = "companion"


class ProdCompanionProvider(CompanionProvider):
    """Production companion provider.

    The client is built even when the companion service is disabled; the
    domain checks ``enabled`` before calling it.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_companion_client(self, settings: Settings) -> CompanionClient:
        return RealCompanionClient(settings.companion)

"""Mock companion service provider for testing."""

from dishka import Scope, provide

from enroll.adapter.companion import MockCompanionClient
from enroll.domain.service import CompanionClient
from enroll.util.di.infrastructure.companion import CompanionProvider


class MockCompanionProvider(CompanionProvider):
    """In-memory companion service."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_companion_client(self) -> CompanionClient:
        return MockCompanionClient()

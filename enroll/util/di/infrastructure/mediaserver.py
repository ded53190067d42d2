"""Media server infrastructure providers."""

from dishka import Scope, provide

from enroll.adapter.mediaserver import RealMediaServerClient
from enroll.config import Settings
from enroll.domain.service import AccountClient
from enroll.util.di.base import ProviderBase


class MediaServerProvider(ProviderBase):
    """Media server component base."""

    __mock_component__ = "mediaserver"


class ProdMediaServerProvider(MediaServerProvider):
    """Production media server provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_account_client(self, settings: Settings) -> AccountClient:
        """Provide the media server account client.

        Raises:
            ValueError: If no media server URL is configured
        """
        if not settings.media_server.url:
            raise ValueError("Media server URL must be configured")
        return RealMediaServerClient(settings.media_server)

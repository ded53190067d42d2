"""Mock providers for testing."""

from .companion import MockCompanionProvider
from .mediaserver import MockMediaServerProvider
from .messaging import MockMessagingProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockCompanionProvider",
    "MockMediaServerProvider",
    "MockMessagingProvider",
    "MockPersistenceProvider",
    "build_test_container",
]

"""Infrastructure providers."""

# Import bases
from .companion import CompanionProvider
from .mediaserver import MediaServerProvider
from .messaging import ChatAggregatorProvider, MessagingProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .companion import ProdCompanionProvider  # noqa: F401
from .mediaserver import ProdMediaServerProvider  # noqa: F401
from .messaging import ProdMessagingProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "ChatAggregatorProvider",
    "CompanionProvider",
    "MediaServerProvider",
    "MessagingProvider",
    "PersistenceProvider",
    "ProdCompanionProvider",
    "ProdMediaServerProvider",
    "ProdMessagingProvider",
    "ProdPersistenceProvider",
]

"""Dependency injection module."""

from typing import Type

from enroll.util.di.application import ProdApplicationProvider
from enroll.util.di.base import Component, ProviderBase
from enroll.util.di.core import ProdConfigProvider
from enroll.util.di.domain import ProdDomainProvider
from enroll.util.di.infrastructure import (
    ChatAggregatorProvider,
    CompanionProvider,
    MediaServerProvider,
    MessagingProvider,
    PersistenceProvider,
    ProdCompanionProvider,
    ProdMediaServerProvider,
    ProdMessagingProvider,
    ProdPersistenceProvider,
)
from enroll.util.di.verification import ProdVerificationProvider

PROVIDERS: list[Type[ProviderBase]] = [
    # Concrete
    ProdConfigProvider,
    ProdDomainProvider,
    ProdVerificationProvider,
    ProdApplicationProvider,
    # Swappable components
    PersistenceProvider,
    MediaServerProvider,
    CompanionProvider,
    MessagingProvider,
    # Combines the chat transports
    ChatAggregatorProvider,
]


def get_provider(base: Type[ProviderBase], use_mock: bool = False) -> Type[ProviderBase]:
    """Resolve a provider entry to the class to instantiate.

    A base without subclasses is concrete and returned unchanged. Otherwise
    the subclass whose ``__is_mock__`` matches ``use_mock`` is chosen.

    Raises:
        ValueError: If no matching implementation is registered
    """
    subclasses = base.__subclasses__()
    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )
    if impl is None:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise ValueError(f"No {kind} implementation for {component_name}")
    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdVerificationProvider",
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

"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, Provider, make_async_container

from enroll.util.di import PROVIDERS, Component, get_provider


def build_test_container(
    unmock: set[Component] | None = None, *extra: Provider
) -> AsyncContainer:
    """Build a container with mock components, except those in ``unmock``.

    Examples:
        # Unit tests - all mocks
        container = build_test_container()

        # Integration tests - real PostgreSQL
        container = build_test_container(unmock={"persistence"})

        # API tests - also serve FastAPI requests
        container = build_test_container(set(), FastapiProvider())
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    providers = []
    for base in PROVIDERS:
        component_name = getattr(base, "__mock_component__", None)
        if not base.__subclasses__() or component_name is None:
            provider_class = get_provider(base, use_mock=False)
        else:
            provider_class = get_provider(base, use_mock=component_name not in unmock)
        providers.append(provider_class())

    return make_async_container(*providers, *extra)


def _validate_unmock(unmock: set[Component]) -> None:
    """Raises ValueError for component names no provider declares."""
    known = {
        base.__mock_component__
        for base in PROVIDERS
        if base.__subclasses__() and base.__mock_component__
    }
    unknown = unmock - known
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

"""Test harness.

Integration tests assume PostgreSQL is reachable at ``DATABASE__URL``.
"""

import pytest_asyncio

from enroll.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for test environment fixtures.

    The fixture yields a request-scoped container; repositories, services and
    mock clients resolved from it are shared for the whole test.

    Usage:
        unit_env = create_env_fixture()
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_invite(unit_env):
            service = await unit_env.get(InviteService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())
        async with container() as request_container:
            yield request_container
        await container.close()

    return _test_environment

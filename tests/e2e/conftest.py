"""Fixtures for end-to-end API tests over the in-memory store."""

from uuid import UUID

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tally.config import Settings
from tally.interface.api.app import create_app
from tally.persistence.repository.inmemory import InMemoryStore
from tally.util.di.container import setup_di
from tally.util.jwt import create_token
from tests.di import build_test_container


def auth_cookie(voter_id: UUID) -> dict[str, str]:
    """Cookie header carrying a valid token for ``voter_id``."""
    token = create_token(str(voter_id), Settings().auth)
    return {"Cookie": f"auth_token={token}"}


@pytest_asyncio.fixture
async def container():
    test_container = build_test_container()
    yield test_container
    await test_container.close()


@pytest_asyncio.fixture
async def store(container) -> InMemoryStore:
    return await container.get(InMemoryStore)


@pytest_asyncio.fixture
async def client(container):
    """Create test client with test container."""
    app_instance = create_app()
    setup_di(app_instance, container)
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

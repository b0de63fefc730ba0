"""Root conftest: shared test configuration and app fixtures.

Invariants:
    - Every test gets a fresh app with its own seeded UserStore
    - Environment is pinned before users_api.main is imported (module-level app)
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")

from users_api.config import Settings  # noqa: E402
from users_api.core.user_store import UserStore  # noqa: E402
from users_api.main import create_app  # noqa: E402


@pytest.fixture
def settings():
    return Settings(environment="test", log_format="text", _env_file=None)


@pytest.fixture
def store():
    return UserStore.with_sample_users()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
async def client(app):
    """HTTP client bound to the ASGI app (no network)."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

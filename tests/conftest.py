"""Test configuration and fixtures."""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Override settings before importing app modules
os.environ["NOTION_TOKEN"] = "secret_test-token"
os.environ["NOTION_DATABASE_ID"] = "0f1e2d3c-4b5a-6978-8796-a5b4c3d2e1f0"
os.environ["DISPLAY_TIMEZONE"] = "UTC"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from dashboard.services.notion import get_notion_service
from main import app
from tests.factories import FakeNotion


@pytest.fixture
def fake_notion() -> FakeNotion:
    return FakeNotion()


@pytest.fixture
async def client(fake_notion: FakeNotion) -> AsyncGenerator[AsyncClient, None]:
    """Async test client with Notion replaced by the in-memory fake."""
    app.dependency_overrides[get_notion_service] = lambda: fake_notion
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

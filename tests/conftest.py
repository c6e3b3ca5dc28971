from __future__ import annotations

import os

os.environ["HUBSPOT_API_TOKEN"] = "test-token"
os.environ["HUBSPOT_API_URL"] = "https://hubspot.test"
os.environ["CORS_ALLOWED_ORIGINS"] = "*"

from collections.abc import AsyncGenerator, Generator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from offerflow.api.deps import get_crm_client
from offerflow.main import app


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def mock_crm() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def override_get_crm_client(mock_crm: AsyncMock) -> Generator[None, None, None]:
    async def _override() -> AsyncMock:
        return mock_crm

    app.dependency_overrides[get_crm_client] = _override
    yield
    app.dependency_overrides.pop(get_crm_client, None)

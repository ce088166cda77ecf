"""Fixtures for API integration tests."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from compensation_engine.api.app import create_app


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


SCENARIO_POLICY = {
    "annual_ctc": "1200000",
    "hra_percentage": "10",
    "conveyance": "1000",
    "telephone": "500",
    "medical": "1250",
    "include_provident_fund": True,
    "include_state_insurance": False,
}

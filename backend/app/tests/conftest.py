# backend/app/tests/conftest.py

import random
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from backend.app.config import TestingSettings
from backend.app.main import app
from backend.app.services.seating import SeatingService


@pytest.fixture
def settings() -> TestingSettings:
    """Deterministic settings that do not depend on the environment."""
    return TestingSettings(
        DEFAULT_ROWS=5,
        DEFAULT_COLUMNS=6,
        ARRANGEMENT_SEED=42,
        OPTIMIZE_TIMEOUT_SECONDS=5.0,
    )


@pytest.fixture
def service(settings) -> SeatingService:
    return SeatingService(settings, rng=random.Random(7))


@pytest_asyncio.fixture
async def client(service: SeatingService) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client bound to the ASGI app. The transport does not run the
    lifespan, so the service is installed on the app state directly.
    """
    app.state.seating_service = service
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
    app.state.seating_service = None

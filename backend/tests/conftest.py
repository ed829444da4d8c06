"""Integration test fixtures.

This conftest provides the ASGI client used by the app tests and keeps
the process-wide settings cache isolated between tests.
"""

from __future__ import annotations

import os
from typing import Any, AsyncIterator, Generator, cast

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from infrastructure.config import get_calculation_settings


@pytest.fixture(autouse=True)
def _clear_settings_env() -> Generator[None, None, None]:
    """Remove BODY_METRICS_* variables and reset the settings cache.

    Avoids values from a local .env changing the constants tests expect.
    Tests that need a value set it with monkeypatch.setenv.
    """
    for key in [k for k in os.environ if k.startswith("BODY_METRICS_")]:
        del os.environ[key]
    get_calculation_settings.cache_clear()
    try:
        yield
    finally:
        get_calculation_settings.cache_clear()


@pytest_asyncio.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Client HTTP asincrono per test GraphQL/REST.

    Usa httpx.AsyncClient con ASGITransport esplicito e base_url fittizia
    per coerenza nelle richieste relative.
    """
    from app import app

    transport = ASGITransport(app=cast(Any, app))
    async with AsyncClient(
        transport=transport,
        base_url="http://testserver",
    ) as ac:
        yield ac

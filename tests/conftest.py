import os

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

# No real credentials or endpoints in tests
os.environ["DEEPSEEK_API_KEY"] = ""
os.environ["DEEPSEEK_BASE_URL"] = ""
os.environ["DEEPSEEK_MODEL"] = ""
os.environ.pop("DEEPSEEK_TIMEOUT", None)

from dictation_polish.handler import PolishHandler
from dictation_polish.main import app
from dictation_polish.routers.polish import get_polish_handler

from fakes import TEST_CONFIG, FakeDeepSeek


@pytest.fixture
def deepseek():
    return FakeDeepSeek()


@pytest.fixture
def handler(deepseek):
    """Provide a handler wired to the fake upstream."""
    return PolishHandler(TEST_CONFIG, transport=deepseek.transport)


@pytest.fixture
def client(handler):
    """Provide a synchronous TestClient with the fake upstream injected."""
    app.dependency_overrides[get_polish_handler] = lambda: handler
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(handler):
    """Provide an async httpx client for async HTTP tests."""
    app.dependency_overrides[get_polish_handler] = lambda: handler
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()

"""
QRVault Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, so every test gets a fresh database):
    ├── test_settings: Settings pointing at a SQLite file under tmp_path
    ├── store: initialized QRCodeStore on that file (closed after the test)
    ├── generator: QRCodeGenerator with default size and level
    ├── sample_png_bytes: tiny valid PNG for store tests
    ├── mock_store / mock_generator: mocks for service unit tests
    ├── test_app: FastAPI app with its lifespan entered
    └── test_client: HTTPX AsyncClient talking to test_app in-process
"""

import base64
import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings BEFORE any qrvault import builds the default Settings
os.environ["DB_PATH"] = os.path.join(
    tempfile.mkdtemp(prefix="qrvault_test_"), "qrcodes.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

from qrvault.config import Settings  # noqa: E402
from qrvault.main import create_app  # noqa: E402
from qrvault.services.qr_generator import QRCodeGenerator  # noqa: E402
from qrvault.services.qr_store import QRCodeStore  # noqa: E402

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path):
    """Settings with a per-test database file (its directory does not exist yet)."""
    return Settings(
        db_path=str(tmp_path / "data" / "qrcodes.db"),
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def store(test_settings):
    """
    An initialized QRCodeStore on a fresh SQLite file.

    Usage:
        async def test_create(store, sample_png_bytes):
            record = await store.create("hello", "", sample_png_bytes)
    """
    qr_store = QRCodeStore(test_settings.db_path)
    await qr_store.init()
    yield qr_store
    await qr_store.close()


@pytest.fixture
def generator():
    """QRCodeGenerator with the default 256px size and level M."""
    return QRCodeGenerator()


@pytest.fixture
def sample_png_bytes():
    """
    Smallest valid PNG: a 1×1 transparent pixel.

    Stands in for generator output in tests that only exercise persistence.
    """
    return base64.b64decode(
        "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8/5+hHgAHggJ/PQIv5gAAAABJRU5ErkJggg=="
    )


@pytest.fixture
def mock_store():
    """
    AsyncMock standing in for QRCodeStore.

    Usage:
        mock_store.get_by_id.return_value = None
        await service.get_image(1)  # → NotFoundError
    """
    qr_store = MagicMock(spec=QRCodeStore)
    qr_store.create = AsyncMock()
    qr_store.get_by_id = AsyncMock()
    qr_store.list = AsyncMock(return_value=[])
    qr_store.update_label = AsyncMock()
    qr_store.delete = AsyncMock()
    return qr_store


@pytest.fixture
def mock_generator():
    """MagicMock standing in for QRCodeGenerator; generate() returns fake PNG bytes."""
    qr_generator = MagicMock(spec=QRCodeGenerator)
    qr_generator.generate.return_value = PNG_MAGIC + b"fake"
    return qr_generator


@pytest_asyncio.fixture
async def test_app(test_settings):
    """
    FastAPI app running its lifespan (database opened, service on app.state).

    ASGITransport does not send lifespan events itself, so the context is
    entered here for the duration of the test.
    """
    app = create_app(test_settings)
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the app (no network, no server).

    Redirects are not followed so tests can assert on 303 responses.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

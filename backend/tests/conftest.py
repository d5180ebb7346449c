"""
SightSharing Backend: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.
Who:   Used by all test files in the tests/ directory.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── temp_storage:    Temporary storage root for FileService
    ├── png_bytes / rgba_png_bytes / jpeg_bytes: real images made with Pillow
    ├── database:        Empty destinations table on the test SQLite file
    ├── db_session:      AsyncSession bound to that table
    └── test_client:     HTTPX AsyncClient wired to the FastAPI app
"""

import io
import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from PIL import Image


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Settings are read once at import, so these must be set before any
# sightsharing module is imported
_TEST_ROOT = tempfile.mkdtemp(prefix="sightsharing_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT}/test.db"
os.environ["STORAGE_ROOT"] = os.path.join(_TEST_ROOT, "storage")
os.environ["STATIC_ROOT"] = os.path.join(_TEST_ROOT, "client")
os.environ["GALLERY_PAGE_SIZE"] = "9"
os.environ["LOG_LEVEL"] = "WARNING"


# ══════════════════════════════════════════════════════════════════════════
# Images
# ══════════════════════════════════════════════════════════════════════════


def make_image(fmt: str = "PNG", mode: str = "RGB", size=(16, 12), color="red") -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    return make_image("PNG")


@pytest.fixture
def rgba_png_bytes():
    return make_image("PNG", mode="RGBA", color=(0, 128, 255, 100))


@pytest.fixture
def jpeg_bytes():
    return make_image("JPEG", color="blue")


# ══════════════════════════════════════════════════════════════════════════
# Storage / Database
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        await service.list_destinations(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def temp_storage(tmp_path):
    storage_dir = tmp_path / "storage"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest_asyncio.fixture
async def database():
    """
    Fresh destinations table for one test.

    The pooled connections are disposed at teardown: each test runs on its
    own event loop and aiosqlite connections cannot cross loops.
    """
    from sightsharing.database import Base, engine, init_db

    await init_db()
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    from sightsharing.database import async_session_factory

    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient configured to talk to the FastAPI app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from sightsharing.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

"""
Shared fixtures: SQLite metadata store, local blob store, ASGI client.

Run:  pytest -v
"""
import os
import tempfile

# Must be set before civic_assistant.config is imported anywhere
_TEST_ROOT = tempfile.mkdtemp(prefix="civic-assistant-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT}/app.db"
os.environ["FILE_STORAGE_TYPE"] = "local"
os.environ["FILE_STORAGE_PATH"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["PUBLIC_BASE_URL"] = "http://testserver"

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from civic_assistant.database import get_db
from civic_assistant.main import app
from civic_assistant.models import Base
from civic_assistant.services.blob_storage import BlobStorageService, get_blob_storage


@pytest.fixture
async def db_engine(tmp_path):
    """Fresh SQLite database with the documents table created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/metadata.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def broken_db_engine(tmp_path):
    """SQLite database without any tables, so every query fails."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/empty.db")
    yield engine
    await engine.dispose()


@pytest.fixture
async def db(db_engine):
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
async def broken_db(broken_db_engine):
    session_factory = async_sessionmaker(broken_db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path):
    """Local blob store rooted in the test's temp directory."""
    return BlobStorageService(
        storage_type="local",
        base_path=tmp_path / "blobs",
        bucket="documents",
        public_base_url="http://testserver",
    )


def _override_db(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _get_db():
        async with session_factory() as session:
            yield session

    return _get_db


@pytest.fixture
async def client(db_engine, storage):
    """HTTP client against the app with test DB and blob store wired in."""
    app.dependency_overrides[get_db] = _override_db(db_engine)
    app.dependency_overrides[get_blob_storage] = lambda: storage
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def broken_client(broken_db_engine, storage):
    """Same as client, but the metadata store has no documents table."""
    app.dependency_overrides[get_db] = _override_db(broken_db_engine)
    app.dependency_overrides[get_blob_storage] = lambda: storage
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()

"""Pytest configuration and shared fixtures"""

import os
import tempfile

# Settings are read once at import time, so the environment has to be in
# place before anything from backend is imported
_TEST_DIR = tempfile.mkdtemp(prefix="filehold-tests-")
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["STORAGE_TYPE"] = "local"
os.environ["UPLOAD_DIR"] = f"{_TEST_DIR}/uploads"
os.environ["APP_URL"] = "http://testserver"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "warning"
os.environ.pop("ACCESS_LOG_FILE", None)

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from backend.app.db.base import AsyncSessionLocal, engine  # noqa: E402
from backend.app.db.init_db import init_models  # noqa: E402
from backend.app.main import app  # noqa: E402
from backend.app.models.user import User  # noqa: E402
from tests.helpers import InMemoryBlobSink  # noqa: E402


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh tables for every test"""
    await init_models(engine, drop=True)
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
def memory_sink() -> InMemoryBlobSink:
    return InMemoryBlobSink()


@pytest_asyncio.fixture
async def make_user(db_session):
    """Insert a user row directly, bypassing password hashing"""

    async def _make_user(email: str, name: str = "Test User") -> User:
        user = User(name=name, email=email, hashed_password="not-a-bcrypt-hash")
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest_asyncio.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()

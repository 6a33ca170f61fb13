"""
NoteKeeper Backend: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (mocked DB, real SQLite DB,
       API client, signed tokens).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── make_note: Builds unsaved Note instances
    ├── db_engine: Async engine on a temporary SQLite file, tables created
    ├── session_factory: Sessions on db_engine for seeding/inspecting rows
    ├── make_token / auth_headers: Bearer tokens signed with the test secret
    └── test_client: HTTPX AsyncClient wired to a fresh app using db_engine
"""

import os
import tempfile

# Override settings BEFORE any notekeeper import; config is read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="notekeeper_test_"), "test.db"
)
os.environ["AUTH_JWT_SECRET"] = "test-secret-not-real"
os.environ["AUTH_TRUSTED_HEADER"] = ""
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timedelta, timezone
from typing import Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from notekeeper.config import settings
from notekeeper.database import create_tables, get_db_session
from notekeeper.models.note import Note


# ══════════════════════════════════════════════════════════════════════════
# Mocked Persistence
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_note(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
            result = await note_service.get_note(mock_db_session, "user-1", note_id)
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
def make_note():
    """Factory for Note instances that are not attached to any session."""

    def _make(
        user_id: str = "user-1",
        title: str = "Shopping list",
        body: str = "Milk, eggs, bread",
        updated_at: Optional[datetime] = None,
    ) -> Note:
        now = datetime.now(timezone.utc)
        return Note(
            id=uuid4(),
            user_id=user_id,
            title=title,
            body=body,
            created_at=now,
            updated_at=updated_at or now,
        )

    return _make


# ══════════════════════════════════════════════════════════════════════════
# Real SQLite Persistence
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Async engine on a per-test SQLite file with the notes table created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """
    Session factory on db_engine for seeding and inspecting rows.

    Open a short-lived session per use so no read transaction holds the
    SQLite file lock while the API writes.
    """
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


# ══════════════════════════════════════════════════════════════════════════
# Authentication
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_token():
    """Sign a bearer token the way the external identity provider would."""

    def _make(
        user_id: Optional[str] = "user-1",
        first_name: Optional[str] = "Ada",
        expires_in: timedelta = timedelta(minutes=30),
        secret: Optional[str] = None,
    ) -> str:
        claims = {"exp": datetime.now(timezone.utc) + expires_in}
        if user_id is not None:
            claims["sub"] = user_id
        if first_name is not None:
            claims["given_name"] = first_name
        return jwt.encode(
            claims,
            secret or settings.auth_jwt_secret,
            algorithm=settings.auth_jwt_algorithm,
        )

    return _make


@pytest.fixture
def auth_headers(make_token):
    """Authorization headers for a given user id (default: user-1)."""

    def _headers(user_id: str = "user-1", first_name: Optional[str] = "Ada") -> dict:
        return {"Authorization": f"Bearer {make_token(user_id=user_id, first_name=first_name)}"}

    return _headers


# ══════════════════════════════════════════════════════════════════════════
# API Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    How:   A fresh app from create_app() whose get_db_session dependency is
           overridden to use session_factory (same commit/rollback contract).

    Usage:
        async def test_dashboard(test_client, auth_headers):
            response = await test_client.get("/dashboard", headers=auth_headers())
            assert response.status_code == 200
    """
    from notekeeper.main import create_app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

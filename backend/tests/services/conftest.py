"""Service test fixtures: async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - register_user goes through the real /auth/register route and returns auth headers

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests;
      the conflict-tolerant inserts have a SQLite flavour for exactly this reason
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.models.profile import Profile
from app.models.project import Project
from app.models.user import User
import app.infrastructure.database as db_module
from app.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def register_user(client):
    """Register through the API; returns ids plus Authorization headers."""
    async def _register(username: str, password: str = "password123") -> dict:
        res = await client.post("/api/v1/auth/register", json={
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
            "password_confirm": password,
        })
        assert res.status_code == 201, res.text
        body = res.json()
        return {
            "user_id": body["user_id"],
            "profile_id": body["profile_id"],
            "headers": {"Authorization": f"Bearer {body['access_token']}"},
        }
    return _register


@pytest.fixture
async def ada(register_user):
    return await register_user("ada")


@pytest.fixture
async def bob(register_user):
    return await register_user("bob")


@pytest.fixture
async def seed_project(test_db):
    """A user, profile and bare project inserted straight into the test DB."""
    user = User(username="owner", email="owner@example.com", password_hash="x")
    test_db.add(user)
    await test_db.commit()
    profile = Profile(user_id=user.id, name="Owner", username="owner")
    test_db.add(profile)
    await test_db.commit()
    project = Project(owner_id=profile.id, title="Seed", description="Seeded project")
    test_db.add(project)
    await test_db.commit()
    return project

"""Service test fixtures: async DB, repositories, FastAPI test client and tokens.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db dependency overridden to use the test DB
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - StaticPool: every session shares the single in-memory connection
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import userposts.infrastructure.database as db_module
from userposts.api.deps import get_token_service
from userposts.db.base import Base
from userposts.infrastructure.database import (
    DatabaseSessionManager, enable_sqlite_foreign_keys, get_db,
)
from userposts.main import app
from userposts.repositories.address_repository import SqlAlchemyAddressRepository
from userposts.repositories.post_repository import SqlAlchemyPostRepository
from userposts.repositories.user_repository import SqlAlchemyUserRepository
import userposts.models  # noqa: F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
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
def user_repo(test_db):
    return SqlAlchemyUserRepository(test_db)


@pytest.fixture
def address_repo(test_db):
    return SqlAlchemyAddressRepository(test_db)


@pytest.fixture
def post_repo(test_db):
    return SqlAlchemyPostRepository(test_db)


@pytest.fixture
def tokens():
    return get_token_service()


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


def user_payload(n: int = 1, **overrides) -> dict:
    """Valid create payload; n keeps emails distinct."""
    payload = {
        "firstName": f"User{n}",
        "lastName": "Tester",
        "email": f"user{n}@mail.com",
        "phoneNumber": "+5511999990000",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def register(client, tokens):
    """POST a user through the API; returns (user_json, auth_headers)."""
    async def _register(n: int = 1, **overrides):
        res = await client.post("/api/v1/users", json=user_payload(n, **overrides))
        assert res.status_code == 201, res.text
        user = res.json()["data"]
        token = tokens.issue(user["id"])
        return user, {"Authorization": f"Bearer {token}"}
    return _register

import os

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from main import app
from shared.dependencies import get_db, get_password_hasher
from shared.infrastructure.database import Base
from users.application.factory import UserFactory
from users.application.mapper import UserMapper
from users.application.services import UserService
from users.infrastructure.bcrypt_hasher import BcryptPasswordHasher
from users.infrastructure.user_repository import DbUserRepository

import users.infrastructure.orm_models  # noqa: F401

# Lowest work factor bcrypt accepts; keeps the suite fast.
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def test_database_url(tmp_path):
    return os.environ.get(
        "TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'users_test.db'}"
    )


@pytest.fixture
async def test_engine(test_database_url):
    engine = create_async_engine(test_database_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db(test_engine):
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def hasher():
    return BcryptPasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def repo(db):
    return DbUserRepository(db)


@pytest.fixture
def service(repo, hasher):
    return UserService(
        repository=repo,
        factory=UserFactory(hasher),
        mapper=UserMapper(),
        hasher=hasher,
    )


@pytest.fixture
async def override_dependencies(test_engine, hasher):
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async def _override_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client(override_dependencies):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def create_user(client: AsyncClient, suffix: str = "", **overrides) -> dict:
    """Create a user over HTTP and return the response body."""
    payload = {
        "username": f"testuser{suffix}",
        "email": f"test{suffix}@example.com",
        "password": "secret123",
    }
    payload.update(overrides)
    resp = await client.post("/api/users", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()

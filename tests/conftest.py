"""Shared fixtures: a throwaway SQLite database per test and an API client bound to it."""

import os

# The module-level engine is never used by tests; keep it off PostgreSQL
os.environ.setdefault("DB__DB_URL", "sqlite+aiosqlite:///./.pytest-dayflow.db")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from dayflow.core.database import db_helper
from dayflow.core.schemas.auth import UserCreate
from dayflow.core.security import create_access_token, get_password_hash
from dayflow.models import Base
from dayflow.repositories.user_repository import UserRepository

PASSWORD = "correct-horse-42"


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'dayflow.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


async def make_user(session, name="Alex", email="alex@dayflow.app"):
    repo = UserRepository(session)
    return await repo.create(
        UserCreate(name=name, email=email, password=PASSWORD),
        get_password_hash(PASSWORD),
    )


@pytest_asyncio.fixture
async def user(session):
    return await make_user(session)


@pytest.fixture
def auth_headers(user):
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(session_factory):
    from main import app

    async def session_override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[db_helper.session_getter] = session_override
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()

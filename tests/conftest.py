"""Test fixtures — a fresh in-memory database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own SQLite in-memory engine (StaticPool keeps the
   single connection alive so every session sees the same database).
2. Tables are created from the models, so no migrations or running
   Postgres are needed.
3. The app's get_db dependency is overridden to hand out the test session.

Env vars are set before anything from brewlog is imported, because the
settings singleton is built at import time.
"""

import os

os.environ.setdefault("BREWLOG_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BREWLOG_JWT_SECRET", "test-secret-do-not-use")
os.environ.setdefault("BREWLOG_BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from brewlog.db.engine import create_schema, get_db  # noqa: E402
from brewlog.main import app  # noqa: E402

TEST_DB_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a brand new in-memory database."""
    engine = create_async_engine(
        TEST_DB_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(engine)
    session = AsyncSession(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client with only get_db overridden — auth runs for real.

    Learn: there's no get_current_user override here. Tests that need a
    logged-in user sign up through the API and send the token back, so
    the ownership checks see real claims.
    """
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture()
def token_service():
    return app.state.token_service


@pytest.fixture()
def signup(client):
    """Sign up through the API; returns {"user", "headers"} for Bearer auth.

    The cookie jar is cleared afterwards so later requests are anonymous
    unless a test passes the headers explicitly.
    """
    async def _signup(email: str, password: str = "coffee123") -> dict:
        return await _signup_via_api(client, email, password)

    return _signup


async def _signup_via_api(client, email: str, password: str) -> dict:
    r = await client.post(
        "/api/v1/auth/signup", json={"email": email, "password": password}
    )
    assert r.status_code == 201, r.text
    r = await client.post(
        "/api/v1/auth/token", json={"email": email, "password": password}
    )
    assert r.status_code == 200, r.text
    body = r.json()
    client.cookies.clear()
    return {
        "user": body["user"],
        "headers": {"Authorization": f"Bearer {body['access_token']}"},
    }

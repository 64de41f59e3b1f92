"""Shared test fixtures."""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from billbook.api.deps import AuthUser, get_current_user, get_db, get_today
from billbook.main import app
from billbook.models import Base

TODAY = date(2024, 3, 13)  # a Wednesday

ALICE = AuthUser(id="user-alice", email="alice@example.com", username="alice")


@pytest.fixture
async def session_factory():
    """In-memory SQLite database with the schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
    await engine.dispose()


@pytest.fixture
def current_user():
    """Mutable holder so a test can switch the authenticated user."""
    return {"user": ALICE}


@pytest.fixture
async def client(session_factory, current_user):
    """Async test client for the FastAPI app."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: current_user["user"]
    app.dependency_overrides[get_today] = lambda: TODAY

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_bill(client):
    """Create a bill through the API and return its JSON."""

    async def _make(type="expense", amount="10.00", category="food", date=TODAY, description=None):
        payload = {
            "type": type,
            "amount": str(amount),
            "category": category,
            "date": date.isoformat(),
        }
        if description is not None:
            payload["description"] = description
        response = await client.post("/api/v1/bills", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make

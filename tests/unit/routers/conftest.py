"""
Fixtures for router tests.

Requests go through the real app (httpx ASGITransport) with get_db
overridden to the per-test SQLite session.
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from cms.core.database import get_db
from cms.core.security import create_access_token
from cms.main import create_app


@pytest_asyncio.fixture
async def app(db_session):
    application = create_app(use_lifespan=False)

    async def override_get_db():
        yield db_session

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest_asyncio.fixture
async def client(app, org):
    token = create_access_token({"sub": "user-1", "org_id": str(org.id), "email": "u1@example.com"})
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {token}"},
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def anonymous_client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

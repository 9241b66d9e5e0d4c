"""
Pytest fixtures for CMS API testing infrastructure.

This module provides:
1. Environment for Settings (secret key, testing mode)
2. Database fixtures (in-memory SQLite through aiosqlite, one database per test)
3. Tenant fixtures (organizations, actor id)
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Settings are read lazily; these must be in place before the first get_settings()
os.environ["CMS_ENVIRONMENT"] = "testing"
os.environ.setdefault("CMS_SECRET_KEY", "test-secret-key-for-unit-testing-must-be-32-chars")
os.environ.setdefault("CMS_DATABASE_URL", "sqlite+aiosqlite://")

from cms.models.orm import Base, Organization  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ==================== DATABASE FIXTURES ====================


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all tables created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session bound to the per-test database."""
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


# ==================== TENANT FIXTURES ====================


@pytest_asyncio.fixture
async def org(db_session: AsyncSession) -> Organization:
    organization = Organization(name="Org One", slug="org1")
    db_session.add(organization)
    await db_session.flush()
    return organization


@pytest_asyncio.fixture
async def other_org(db_session: AsyncSession) -> Organization:
    organization = Organization(name="Org Two", slug="org2")
    db_session.add(organization)
    await db_session.flush()
    return organization


@pytest.fixture
def actor_id() -> str:
    return "user-1"

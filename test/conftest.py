"""
Pytest configuration and shared fixtures.
"""
from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import betportal.auth.models  # noqa: F401  (register tables)
import betportal.betting.models  # noqa: F401
from betportal.auth.loader import ApiClientLoader
from betportal.auth.models import User
from betportal.auth.schemas import AuthResult
from betportal.config import Settings
from betportal.shared.database import Base
from betportal.storage.memory import InMemoryStorage
from betportal.ui.navigation import HistoryNavigator


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        app_env="dev",
        database_url="sqlite+aiosqlite:///:memory:",
        api_base_url="https://api.test/api/",
        storage_backend="memory",
        storage_path=str(tmp_path / "storage.json"),
        token_storage_key="auth_token",
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def navigator(settings: Settings) -> HistoryNavigator:
    return HistoryNavigator(settings.login_route)


@pytest.fixture
def api_client() -> MagicMock:
    """Stand-in for ApiClient with async login/signup."""
    client = MagicMock(name="api_client")
    client.login = AsyncMock(return_value=AuthResult(success=True, token="tok-1"))
    client.signup = AsyncMock(return_value=AuthResult(success=True, token="tok-1"))
    client.aclose = AsyncMock()
    client.is_authenticated = False
    return client


@pytest.fixture
def client_factory(api_client: MagicMock) -> AsyncMock:
    return AsyncMock(return_value=api_client)


@pytest.fixture
def loader(settings: Settings, client_factory: AsyncMock) -> ApiClientLoader:
    return ApiClientLoader(settings=settings, factory=client_factory)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """In-memory SQLite session with every table created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def user(db_session: AsyncSession) -> User:
    u = User(name="Test Player", email="player@example.com")
    db_session.add(u)
    await db_session.flush()
    await db_session.refresh(u)
    return u


@pytest.fixture
def game_window() -> tuple[datetime, datetime]:
    start = datetime(2025, 8, 6, 10, 0, tzinfo=timezone.utc)
    return start, start + timedelta(hours=2)


@pytest.fixture
def default_odds() -> dict[str, Decimal]:
    return {"single": Decimal("9"), "jodi": Decimal("90"), "panna": Decimal("140.5")}

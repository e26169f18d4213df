"""Shared test fixtures."""
import asyncio
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import NullPool

from app.db.base import build_engine
from app.db.init_db import create_tables
from app.db.session import ContextFactory, get_context_factory
from app.main import create_app
from app.services.core.forecast_service import ForecastService


class TrackingSession(AsyncSession):
    """AsyncSession that remembers every instance and how often it was closed."""
    instances = []

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.close_calls = 0
        TrackingSession.instances.append(self)

    async def close(self):
        self.close_calls += 1
        await super().close()


class TrackingContextFactory(ContextFactory):
    def __init__(self, bind):
        super().__init__(bind, class_=TrackingSession)

    @property
    def sessions(self):
        return list(TrackingSession.instances)


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


def make_engine(path: Path):
    # NullPool: every session gets its own connection, so no connection is
    # shared between the event loops of different asyncio.run calls
    return build_engine(sqlite_url(path), poolclass=NullPool)


@pytest.fixture(autouse=True)
def reset_tracked_sessions():
    TrackingSession.instances.clear()
    yield
    TrackingSession.instances.clear()


@pytest.fixture
def engine(tmp_path: Path):
    """Engine on a fresh SQLite file with the schema created."""
    engine = make_engine(tmp_path / "forecasts.db")
    asyncio.run(create_tables(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def context_factory(engine) -> TrackingContextFactory:
    return TrackingContextFactory(engine)


@pytest.fixture
def service(context_factory) -> ForecastService:
    return ForecastService(context_factory)


@pytest.fixture
def unavailable_factory(tmp_path: Path) -> TrackingContextFactory:
    """Factory pointing at a database file that cannot be opened."""
    engine = make_engine(tmp_path / "missing-dir" / "forecasts.db")
    yield TrackingContextFactory(engine)
    asyncio.run(engine.dispose())


def build_client(factory: ContextFactory, debug: bool = True, **kwargs) -> TestClient:
    app = create_app(debug=debug)
    app.dependency_overrides[get_context_factory] = lambda: factory
    return TestClient(app, **kwargs)


@pytest.fixture
def client(context_factory) -> TestClient:
    """Test client wired to the temporary database; lifespan is not run."""
    return build_client(context_factory)


@pytest.fixture
def make_client():
    """Build extra clients, e.g. with debug off or against another factory."""
    return build_client


@pytest.fixture
def engine_factory():
    """Build engines on other SQLite files; callers dispose them."""
    return make_engine

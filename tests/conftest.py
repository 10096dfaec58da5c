"""
Shared fixtures: a fresh in-memory SQLite database per test, fake companion
services and an HTTP client bound to the app.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import config
from database import Base, get_db
from main import app
from api.controllers.serveurs import get_players_client, get_installer_client
from repositories.serveur import ServeurRepository
from repositories.serveur_parameters import ServeurParametersRepository
from services.serveur import ServeurService

TOKEN = "test-token"


class FakePlayersClient:
    """Player counts keyed by container reference."""

    def __init__(self, counts=None):
        self.counts = counts or {}
        self.calls = []

    async def get_players_count(self, serveur):
        self.calls.append(serveur.id)
        return self.counts.get(serveur.container)


class FakeInstallerClient:
    def __init__(self):
        self.payloads = []

    async def install(self, payload):
        self.payloads.append(payload)
        return True


def memory_engine():
    return create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest_asyncio.fixture
async def engine():
    engine = memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def players_client():
    return FakePlayersClient()


@pytest.fixture
def installer_client():
    return FakeInstallerClient()


@pytest.fixture
def service(session, players_client, installer_client):
    return ServeurService(
        ServeurRepository(session),
        ServeurParametersRepository(session),
        players_client,
        installer_client,
    )


@pytest_asyncio.fixture
async def client(session_factory, players_client, installer_client, monkeypatch):
    monkeypatch.setattr(config, "API_TOKEN", TOKEN)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_players_client] = lambda: players_client
    app.dependency_overrides[get_installer_client] = lambda: installer_client
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {TOKEN}"}

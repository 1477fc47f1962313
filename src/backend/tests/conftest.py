"""
Pytest fixtures for StudySync backend tests.
"""

import os
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing")
os.environ.setdefault("AUTH_JWT_SECRET", "test-jwt-secret-for-testing")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("TIMETABLE_ALERTS_ENABLED", "false")


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
async def app() -> Any:
    """Create FastAPI application for testing."""
    from main import app as fastapi_app

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app: Any) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Origin": "http://localhost:3000"},
    ) as ac:
        yield ac


@pytest.fixture
def make_token():
    """Build identity-provider style tokens signed with the test secret."""
    from jose import jwt

    from core.config import settings

    def _make(sub: str | None = "user-1", expires_in: int = 3600, **claims: Any) -> str:
        payload: dict[str, Any] = {
            "aud": settings.AUTH_JWT_AUDIENCE,
            "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
            **claims,
        }
        if sub is not None:
            payload["sub"] = sub
        return jwt.encode(payload, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)

    return _make


@pytest.fixture
def viewer():
    """The authenticated user for API tests."""
    from schemas.profile import Viewer

    return Viewer(id="user-1", email="alice@example.com", display_name="Alice Example")


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers for requests whose viewer is supplied by dependency override."""
    return {"Authorization": "Bearer overridden-in-tests"}


@pytest.fixture
def repos() -> dict[str, AsyncMock]:
    """AsyncMock stand-ins for every repository, keyed by short name."""
    from repositories.cosmos_group_repository import CosmosGroupRepository
    from repositories.cosmos_note_repository import CosmosNoteRepository
    from repositories.cosmos_personal_note_repository import CosmosPersonalNoteRepository
    from repositories.cosmos_poll_repository import CosmosPollRepository
    from repositories.cosmos_profile_repository import CosmosProfileRepository
    from repositories.cosmos_timetable_repository import CosmosTimetableRepository
    from repositories.cosmos_vote_repository import CosmosVoteRepository

    mocks = {
        "profile": AsyncMock(spec=CosmosProfileRepository),
        "group": AsyncMock(spec=CosmosGroupRepository),
        "note": AsyncMock(spec=CosmosNoteRepository),
        "poll": AsyncMock(spec=CosmosPollRepository),
        "vote": AsyncMock(spec=CosmosVoteRepository),
        "personal_note": AsyncMock(spec=CosmosPersonalNoteRepository),
        "timetable": AsyncMock(spec=CosmosTimetableRepository),
    }
    mocks["profile"].get_many.return_value = {}
    return mocks


def _provide(value: Any):
    """Zero-argument dependency returning a fixed value."""

    def dependency() -> Any:
        return value

    return dependency


@pytest.fixture
def authed_app(app: Any, viewer: Any, repos: dict[str, AsyncMock]) -> Any:
    """App with the viewer and all repositories replaced by test doubles."""
    from api.deps import get_current_user
    from repositories import provider

    factories = {
        "profile": provider.get_profile_repository,
        "group": provider.get_group_repository,
        "note": provider.get_note_repository,
        "poll": provider.get_poll_repository,
        "vote": provider.get_vote_repository,
        "personal_note": provider.get_personal_note_repository,
        "timetable": provider.get_timetable_repository,
    }

    app.dependency_overrides[get_current_user] = _provide(viewer)
    for name, factory in factories.items():
        app.dependency_overrides[factory] = _provide(repos[name])
    return app

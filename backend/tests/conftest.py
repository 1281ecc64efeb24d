"""Pytest fixtures for testing."""
import os
import tempfile
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from typing import Any

# Must be set before any app imports that trigger Settings validation.
# Development mode keeps the session cookie non-secure so the http:// test
# client sends it back.
_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="aurastream-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR / 'app.db'}"
os.environ["NODE_ENV"] = "development"
os.environ["JWT_SECRET"] = "test-secret-key-with-enough-length-for-hs256"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient, Response  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from models.account import Account  # noqa: E402
from models.base import Base  # noqa: E402
from schemas.account import SignupRequest  # noqa: E402
from services import account_service  # noqa: E402

SESSION_COOKIE = "jwt-aurastream"
API = "/api/v1"


class StubCatalog:
    """Stand-in for the catalog client that returns canned results."""

    def __init__(self, results: list[dict[str, Any]] | None = None) -> None:
        self.results = results or []
        self.calls: list[tuple[str, str]] = []
        self.error: Exception | None = None

    async def search(self, search_type: str, query: str) -> list[dict[str, Any]]:
        self.calls.append((search_type, query))
        if self.error is not None:
            raise self.error
        return self.results


@pytest.fixture
async def async_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Create a throwaway SQLite database for one test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """
    Create an async session on the test database.

    Services only flush, so everything a test does stays in this session's
    transaction and is discarded with the database file.
    """
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def catalog() -> StubCatalog:
    """Catalog stub shared by the app override and the test."""
    return StubCatalog()


@pytest.fixture
def app_with_overrides(db_session: AsyncSession, catalog: StubCatalog):  # noqa: ANN201
    """The FastAPI app wired to the test session and catalog stub."""
    # Clear the settings cache so it picks up the environment set above
    from core.config import get_settings

    get_settings.cache_clear()

    from api.dependencies import get_catalog_client
    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_catalog_client] = lambda: catalog

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
async def client(app_with_overrides) -> AsyncGenerator[AsyncClient]:  # noqa: ANN001
    """Unauthenticated test client; cookies persist across its requests."""
    async with AsyncClient(
        transport=ASGITransport(app=app_with_overrides),
        base_url="http://test",
    ) as test_client:
        yield test_client


@pytest.fixture
async def other_client(app_with_overrides) -> AsyncGenerator[AsyncClient]:  # noqa: ANN001
    """A second, independent client (separate cookie jar) on the same database."""
    async with AsyncClient(
        transport=ASGITransport(app=app_with_overrides),
        base_url="http://test",
    ) as test_client:
        yield test_client


@pytest.fixture
async def account(db_session: AsyncSession) -> Account:
    """Create a test account (password: 'secret-pass')."""
    return await account_service.create_account(
        db_session,
        SignupRequest(email="viewer@example.com", username="viewer", password="secret-pass"),
    )


@pytest.fixture
async def other_account(db_session: AsyncSession) -> Account:
    """Create another test account for isolation tests (password: 'other-pass')."""
    return await account_service.create_account(
        db_session,
        SignupRequest(email="other@example.com", username="other", password="other-pass"),
    )


@pytest.fixture
def signup() -> Callable[..., Awaitable[Response]]:
    """Sign up through the API with the given client."""

    async def _signup(
        http: AsyncClient,
        email: str = "a@x.com",
        username: str = "a",
        password: str = "abcdef",
    ) -> Response:
        return await http.post(
            f"{API}/auth/signup",
            json={"email": email, "username": username, "password": password},
        )

    return _signup


@pytest.fixture
def create_profile() -> Callable[..., Awaitable[Response]]:
    """Create a profile through the API with the given client."""

    async def _create_profile(http: AsyncClient, name: str, image: str | None = None) -> Response:
        body: dict[str, Any] = {"name": name}
        if image is not None:
            body["image"] = image
        return await http.post(f"{API}/profile", json=body)

    return _create_profile

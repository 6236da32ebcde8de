"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from whereto_auth.api.main import create_app
from whereto_auth.domain.services import (
    AccountService,
    AuthenticationService,
    PasswordHasher,
    PasswordResetService,
    ResetTokenCodec,
)
from whereto_auth.storage.database import Database
from whereto_auth.storage.memory import InMemoryCredentialStore

TEST_JWT_SECRET = "test-secret"
TEST_APP_URL = "http://whereto.test"


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class RecordingNotifier:
    """Notifier that remembers what it was asked to send."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []
        self.fail = False
        self.error: Exception | None = None

    async def send_password_reset_link(self, email: str, reset_url: str) -> bool:
        if self.error is not None:
            raise self.error
        if self.fail:
            return False
        self.sent.append((email, reset_url))
        return True


@pytest.fixture
def hasher():
    """Low-cost bcrypt so tests stay fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def codec(clock):
    return ResetTokenCodec(clock=clock)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def store():
    return InMemoryCredentialStore()


@pytest.fixture
def accounts(store, hasher):
    return AccountService(store, hasher)


@pytest.fixture
def auth_service(store, hasher):
    return AuthenticationService(store, hasher)


@pytest.fixture
def reset_service(store, hasher, codec, notifier):
    return PasswordResetService(store, hasher, codec, notifier)


@pytest.fixture
async def alice(accounts):
    """The account used by the end-to-end scenarios."""
    return await accounts.create_account("Alice", "alice@example.com", "password123")


@pytest.fixture
async def database(tmp_path):
    """Connected SQLite database in a per-test temporary file."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path}/test_whereto.db")
    await db.connect()
    await db.init_schema()
    yield db
    await db.close()


@pytest.fixture
def app(database, notifier, hasher, codec):
    return create_app(
        database=database,
        notifier=notifier,
        hasher=hasher,
        codec=codec,
        jwt_secret_key=TEST_JWT_SECRET,
        app_url=TEST_APP_URL,
    )


@pytest.fixture
async def client(app):
    """Async test client for FastAPI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

"""
Shared fixtures: a fresh SQLite database per test, an HTTP client bound to
the application, and factories for users of every role.
"""
import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key-with-at-least-32-characters")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="webacademy-uploads-"))

from typing import AsyncGenerator, Callable, Dict, List, Optional

import pytest
import pytest_asyncio
from faker import Faker
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from webacademy.core.dependencies import get_notifier
from webacademy.core.security import create_access_token, get_password_hash
from webacademy.domain.constants import UserRole
from webacademy.infrastructure.database.base import Base, get_db
from webacademy.infrastructure.database.models import User
from webacademy.main import app
from webacademy.services.notifications import NotificationService
from webacademy.services.security.rate_limiter import limiter

fake = Faker()

PASSWORD = "secret123"


class RecordingNotifier(NotificationService):
    """Keeps outgoing emails in memory instead of talking to SMTP."""

    def __init__(self):
        super().__init__()
        self.sent: List[Dict[str, str]] = []

    async def _send_email(self, to_email, subject, html_body, text_body, kind) -> bool:
        self.sent.append({"to": to_email, "subject": subject, "body": text_body, "kind": kind})
        return True

    def kinds(self) -> List[str]:
        return [mail["kind"] for mail in self.sent]


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest_asyncio.fixture
async def client(session_factory, notifier) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db) -> Callable:
    """Insert a user directly; returns the ORM row."""

    async def _make_user(
        role: str = UserRole.STUDENT.value,
        institute: Optional[str] = None,
        verified: bool = True,
        email: Optional[str] = None,
        name: Optional[str] = None,
        **extra,
    ) -> User:
        user = User(
            name=name or fake.name(),
            email=email or fake.unique.email().lower(),
            password_hash=get_password_hash(PASSWORD),
            role=role,
            institute=institute,
            identity_verified=verified,
            **extra,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user

    return _make_user


def auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


@pytest_asyncio.fixture
async def super_admin(make_user) -> User:
    return await make_user(role=UserRole.ADMIN.value)


@pytest_asyncio.fixture
async def admin_a(make_user) -> User:
    return await make_user(role=UserRole.ADMIN.value, institute="A")


@pytest_asyncio.fixture
async def admin_b(make_user) -> User:
    return await make_user(role=UserRole.ADMIN.value, institute="B")


@pytest_asyncio.fixture
async def instructor_a(make_user) -> User:
    return await make_user(role=UserRole.INSTRUCTOR.value, institute="A")


@pytest_asyncio.fixture
async def student_a(make_user) -> User:
    return await make_user(role=UserRole.STUDENT.value, institute="A")

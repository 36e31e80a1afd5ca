"""
conftest.py
-----------
Shared pytest fixtures for Inkpress tests.

Provides fixtures for:
- A throwaway SQLite database per test (schema from the models)
- Sessions and a session factory bound to it
- A frozen clock (2025-03-01 12:00 UTC, 18:00 site time)
- Seed helpers: authors, attachments, categories
- An HTTP client over the ASGI app with db and clock overridden
"""
import os

# Settings are read on first import; point them at a local database first.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENV", "test")
os.environ["SITE_UTC_OFFSET_HOURS"] = "6"

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from inkpress.shared.db.session import build_engine
from inkpress.shared.models import Base, Post, PostType, User
from inkpress.shared.schemas.taxonomy import CategoryCreate
from inkpress.shared.services.taxonomy_service import TaxonomyService


NOW = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **delta) -> None:
        self.current = self.current + timedelta(**delta)


# ----- Database Fixtures -----

@pytest_asyncio.fixture
async def engine(tmp_path):
    """File-backed SQLite database with every table created."""
    db_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'inkpress.db'}", poolclass=NullPool)
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db_engine
    await db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as db:
        yield db


@pytest.fixture
def clock():
    return FrozenClock()


# ----- Seed Helpers -----

@pytest_asyncio.fixture
async def author(session):
    """An author with a display name."""
    user = User(user_login="editor", user_email="editor@example.com", display_name="Desk Editor")
    session.add(user)
    await session.commit()
    return user


@pytest.fixture
def make_attachment(session):
    """Factory for media attachment rows (what _thumbnail_id points at)."""

    async def _make(url: str = "https://cdn.example.com/cover.jpg") -> int:
        stamp = NOW.replace(tzinfo=None)
        attachment = Post(
            post_author=1,
            post_title="cover",
            post_type=PostType.ATTACHMENT.value,
            post_mime_type="image/jpeg",
            guid=url,
            post_date=stamp,
            post_date_gmt=stamp,
            post_modified=stamp,
            post_modified_gmt=stamp,
        )
        session.add(attachment)
        await session.commit()
        return attachment.id

    return _make


@pytest.fixture
def make_category(session):
    """Factory for categories; returns the term_taxonomy id."""

    async def _make(name: str, parent: int = 0) -> int:
        binding = await TaxonomyService(session).create_category(
            CategoryCreate(name=name, parent=parent)
        )
        return binding.id

    return _make


@pytest.fixture
def count_rows(session):
    """Count rows of a model matching optional criteria."""

    async def _count(model, *criteria) -> int:
        result = await session.execute(select(func.count()).select_from(model).where(*criteria))
        return result.scalar_one()

    return _count


# ----- API Fixtures -----

@pytest_asyncio.fixture
async def client(session_factory, clock):
    """HTTP client for the app, bound to the test database and clock."""
    from inkpress.api.dependencies.database import get_db
    from inkpress.api.dependencies.services import get_clock
    from inkpress.api.main import create_application

    app = create_application()

    async def override_get_db():
        async with session_factory() as db:
            try:
                yield db
                await db.commit()
            except Exception:
                await db.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http

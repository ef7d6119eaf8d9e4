"""Pytest configuration and fixtures."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from locpages.domain.services.batch_publication_service import BatchRegistry
from locpages.infrastructure.page_events import PageChangeNotifier
from locpages.llm.content_writer import ContentDraft, ContentRequest, ContentWriter
from locpages.persistence.database import Base, get_db
from locpages.persistence.models import *  # noqa: F401, F403
from locpages.persistence.repositories import (
    BusinessRepository,
    BusinessUpdateRepository,
    GeneratedPageRepository,
)


class FakeContentWriter(ContentWriter):
    """Content writer returning canned copy per intent."""

    def __init__(self, fail_intents: dict[str, Exception] | None = None):
        self.fail_intents = fail_intents or {}
        self.requests: list[ContentRequest] = []

    async def write(self, request: ContentRequest) -> ContentDraft:
        self.requests.append(request)
        if request.intent in self.fail_intents:
            raise self.fail_intents[request.intent]
        name = request.business.get("name", "Business")
        return ContentDraft(
            title=f"{name}: {request.update_text[:40]} ({request.intent})",
            description=f"{request.update_text} at {name}.",
            slug=None,
            highlights=["Limited time", "Walk-ins welcome"],
            faqs=[{"question": "When is it?", "answer": "See the update for times."}],
        )


@pytest.fixture
async def db_session():
    """Create a test database session."""
    # Use in-memory SQLite for testing
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def business_repo(db_session):
    return BusinessRepository(db_session)


@pytest.fixture
def update_repo(db_session):
    return BusinessUpdateRepository(db_session)


@pytest.fixture
def page_repo(db_session):
    return GeneratedPageRepository(db_session)


@pytest.fixture
def content_writer():
    return FakeContentWriter()


@pytest.fixture
def make_content_writer():
    """Build a content writer that fails on the given intents."""
    return FakeContentWriter


@pytest.fixture
def batch_registry():
    return BatchRegistry()


@pytest.fixture
def notifier():
    return PageChangeNotifier()


@pytest.fixture
async def business(business_repo):
    """A restaurant in Austin with a minimal profile."""
    return await business_repo.create(
        email="owner@tacoshack.example",
        name="Taco Shack",
        slug="taco-shack",
        primary_category="food-dining",
        address_street="100 Congress Ave",
        address_city="Austin",
        address_state="TX",
        zip_code="78701",
        country="US",
        phone="512-555-0100",
    )


@pytest.fixture
async def client(db_session, content_writer, batch_registry, notifier):
    """Create a test FastAPI client."""
    from httpx import ASGITransport, AsyncClient

    from locpages.api.deps import get_batch_registry, get_content_writer, get_page_notifier
    from locpages.main import app

    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_content_writer] = lambda: content_writer
    app.dependency_overrides[get_batch_registry] = lambda: batch_registry
    app.dependency_overrides[get_page_notifier] = lambda: notifier

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()

# Shared pytest configuration and fixtures for all test types
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from api.main import app
from common.db.base import Base
from common.providers.caching.memory_cache import MemoryCache
from packages.subscriptions.models.database.subscription import SubscriptionEntity
from packages.subscriptions.models.domain.year_month import YearMonth
from packages.subscriptions.repositories.subscription_repository import (
    SubscriptionRepository,
)
from packages.subscriptions.routes.subscriptions import get_subscription_store
from packages.subscriptions.services.subscription_store import SubscriptionStore

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine and initialize schema."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_connection(test_engine):
    """Create test connection with outer transaction for rollback isolation."""
    async with test_engine.connect() as connection:
        trans = await connection.begin()
        yield connection
        await trans.rollback()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_connection):
    """Create session factory bound to test connection.

    Using join_transaction_mode="create_savepoint" so commits inside
    get_session()/transaction() release savepoints instead of the outer
    transaction.
    """
    return async_sessionmaker(
        bind=test_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )


@pytest_asyncio.fixture(scope="function")
async def test_db(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function", autouse=True)
async def patch_lazy_sessions(test_session_factory, monkeypatch):
    """
    Patch session factories to use test database.

    Real transaction() and get_session() run with their commit/rollback
    semantics against the test database.
    """
    monkeypatch.setattr("common.db.scoped.AsyncSessionLocal", test_session_factory)
    monkeypatch.setattr(
        "common.db.scoped.AsyncSessionLocalReadonly", test_session_factory
    )


@pytest_asyncio.fixture(scope="function")
async def memory_cache():
    return MemoryCache()


@pytest_asyncio.fixture(scope="function")
async def client(memory_cache):
    """Create a test client backed by the SQL repository and a memory cache."""

    def override_get_subscription_store():
        return SubscriptionStore(SubscriptionRepository(), memory_cache)

    app.dependency_overrides[get_subscription_store] = override_get_subscription_store

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def sample_subscription(test_db: AsyncSession):
    """Create a sample subscription row for testing."""
    subscription = SubscriptionEntity(
        service_name="Yandex Plus",
        price=400,
        user_id="60601fee-2bf1-4721-ae6f-7636e79a0cba",
        start_date=YearMonth(2025, 7),
        end_date=YearMonth(2025, 12),
    )
    test_db.add(subscription)
    await test_db.commit()
    await test_db.refresh(subscription)
    return subscription

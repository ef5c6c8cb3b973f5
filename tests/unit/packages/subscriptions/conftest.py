import pytest
import pytest_asyncio

from common.providers.caching.memory_cache import MemoryCache
from packages.subscriptions.repositories.memory_subscription_repository import (
    InMemorySubscriptionRepository,
)
from packages.subscriptions.repositories.subscription_repository import (
    SubscriptionRepository,
)
from packages.subscriptions.services.subscription_store import SubscriptionStore


@pytest.fixture(params=["sql", "memory"])
def repository(request):
    """Both repository implementations, run against the same contract."""
    if request.param == "sql":
        return SubscriptionRepository()
    return InMemorySubscriptionRepository()


@pytest.fixture
def memory_repository():
    return InMemorySubscriptionRepository()


@pytest_asyncio.fixture
async def store(memory_repository, memory_cache: MemoryCache):
    return SubscriptionStore(memory_repository, memory_cache, cache_ttl=180)

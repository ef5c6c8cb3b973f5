import itertools
from typing import Dict, List, Optional

from common.core.otel_exporter import get_logger
from packages.subscriptions.models.domain.subscription import (
    Subscription,
    SubscriptionCreateModel,
    SubscriptionUpdateModel,
    SubscriptionFilter,
)
from packages.subscriptions.repositories.interface import (
    SubscriptionRepositoryInterface,
)

logger = get_logger(__name__)


class InMemorySubscriptionRepository(SubscriptionRepositoryInterface):
    """In-memory subscription repository for tests and local runs."""

    def __init__(self):
        self._rows: Dict[int, Subscription] = {}
        # IDs are never reused, even after deletes
        self._ids = itertools.count(1)
        logger.info("In-memory subscription repository initialized")

    async def get(self, id: int) -> Optional[Subscription]:
        row = self._rows.get(id)
        return row.model_copy() if row else None

    async def list(
        self, filters: SubscriptionFilter, skip: int = 0, limit: Optional[int] = None
    ) -> List[Subscription]:
        matches = [
            row.model_copy()
            for _, row in sorted(self._rows.items())
            if filters.matches(row)
        ]
        end = None if limit is None else skip + limit
        return matches[skip:end]

    async def sum_prices(self, filters: SubscriptionFilter) -> int:
        return sum(row.price for row in self._rows.values() if filters.matches(row))

    async def create(self, create_model: SubscriptionCreateModel) -> Subscription:
        subscription = Subscription(id=next(self._ids), **create_model.model_dump())
        self._rows[subscription.id] = subscription
        return subscription.model_copy()

    async def update(
        self, id: int, update_model: SubscriptionUpdateModel
    ) -> Optional[Subscription]:
        row = self._rows.get(id)
        if row is None:
            return None
        updated = row.model_copy(update=update_model.model_dump())
        self._rows[id] = updated
        return updated.model_copy()

    async def delete(self, id: int) -> bool:
        return self._rows.pop(id, None) is not None

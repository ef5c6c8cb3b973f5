"""
Read-through cached subscription store.
"""

from typing import List, Optional

from common.core.config import settings
from common.core.exceptions import NotFoundError, ValidationError
from common.core.otel_exporter import trace_span, get_logger
from common.providers.caching.interface import CacheInterface
from packages.subscriptions.cache_keys import subscription_by_id_key
from packages.subscriptions.models.domain.subscription import (
    Subscription,
    SubscriptionCreateModel,
    SubscriptionUpdateModel,
    SubscriptionFilter,
)
from packages.subscriptions.models.domain.year_month import YearMonth
from packages.subscriptions.repositories.interface import (
    SubscriptionRepositoryInterface,
)

logger = get_logger(__name__)


def _validate_terms(
    price: int, start_date: Optional[YearMonth], end_date: Optional[YearMonth]
) -> None:
    if price < 0:
        raise ValidationError(f"Price must not be negative, got {price}")
    if start_date is None:
        raise ValidationError("Start date is required")
    if end_date is not None and end_date < start_date:
        raise ValidationError(
            f"End date {end_date} precedes start date {start_date}"
        )


class SubscriptionStore:
    """
    CRUD over the durable subscription store with a read-through cache.

    The repository is the source of truth. The cache holds a short-lived copy
    of each record keyed by ID; any cache failure degrades to a miss and is
    never surfaced to callers.
    """

    def __init__(
        self,
        repository: SubscriptionRepositoryInterface,
        cache: CacheInterface,
        cache_ttl: Optional[int] = None,
    ):
        self.repository = repository
        self.cache = cache
        self.cache_ttl = (
            cache_ttl if cache_ttl is not None else settings.subscription_cache_ttl
        )

    async def _read_cached(self, subscription_id: int) -> Optional[Subscription]:
        cache_key = subscription_by_id_key(subscription_id)
        try:
            cached_value = await self.cache.get(cache_key)
            if cached_value is None:
                return None
            return Subscription.model_validate(cached_value)
        except Exception as e:
            logger.warning(f"Cache get failed for key {cache_key}: {e}")
            return None

    async def _write_cached(self, subscription: Subscription) -> None:
        cache_key = subscription_by_id_key(subscription.id)
        try:
            await self.cache.set(
                cache_key, subscription.model_dump(mode="json"), self.cache_ttl
            )
        except Exception as e:
            logger.warning(f"Cache set failed for key {cache_key}: {e}")

    async def _evict_cached(self, subscription_id: int) -> None:
        cache_key = subscription_by_id_key(subscription_id)
        try:
            await self.cache.delete(cache_key)
        except Exception as e:
            logger.warning(f"Cache delete failed for key {cache_key}: {e}")

    @trace_span
    async def get_by_id(self, subscription_id: int) -> Subscription:
        """
        Get a subscription by ID, serving from cache when possible.

        Raises:
            NotFoundError: If no subscription has this ID
            StorageError: If the durable store failed
        """
        cached = await self._read_cached(subscription_id)
        if cached is not None:
            logger.info(f"Serving cached subscription {subscription_id}")
            return cached

        subscription = await self.repository.get(subscription_id)
        if subscription is None:
            raise NotFoundError(f"Subscription {subscription_id} not found")

        await self._write_cached(subscription)
        logger.info(f"Loaded subscription {subscription_id}")
        return subscription

    @trace_span
    async def list(
        self, filters: SubscriptionFilter, skip: int = 0, limit: Optional[int] = None
    ) -> List[Subscription]:
        """List matching subscriptions straight from the durable store."""
        subscriptions = await self.repository.list(filters, skip=skip, limit=limit)
        logger.info(
            f"Listed {len(subscriptions)} subscriptions from {filters.max_start_date} "
            f"to {filters.min_end_date}, user: {filters.user_id}, "
            f"service: {filters.service_name}"
        )
        return subscriptions

    @trace_span
    async def sum_prices(self, filters: SubscriptionFilter) -> int:
        """Plain sum of monthly prices over matching subscriptions."""
        total = await self.repository.sum_prices(filters)
        logger.info(
            f"Summed prices to {total} from {filters.max_start_date} "
            f"to {filters.min_end_date}, user: {filters.user_id}, "
            f"service: {filters.service_name}"
        )
        return total

    @trace_span
    async def create(self, create_model: SubscriptionCreateModel) -> Subscription:
        """
        Create a subscription and cache it.

        Raises:
            ValidationError: If the service name is empty, the price is
                negative, or the date range is missing or inverted
        """
        if not create_model.service_name.strip():
            raise ValidationError("Service name must not be empty")
        _validate_terms(
            create_model.price, create_model.start_date, create_model.end_date
        )

        subscription = await self.repository.create(create_model)
        await self._write_cached(subscription)

        logger.info(
            f"Created subscription {subscription.id}",
            extra={
                "subscription_id": subscription.id,
                "service_name": subscription.service_name,
                "user_id": subscription.user_id,
                "price": subscription.price,
            },
        )
        return subscription

    @trace_span
    async def update(
        self, subscription_id: int, update_model: SubscriptionUpdateModel
    ) -> Subscription:
        """
        Replace price and date range of a subscription and refresh its cache entry.

        Raises:
            ValidationError: If the price is negative or the range is invalid
            NotFoundError: If no subscription has this ID
        """
        _validate_terms(
            update_model.price, update_model.start_date, update_model.end_date
        )

        subscription = await self.repository.update(subscription_id, update_model)
        if subscription is None:
            raise NotFoundError(f"Subscription {subscription_id} not found")

        await self._write_cached(subscription)

        logger.info(
            f"Updated subscription {subscription_id}",
            extra={
                "subscription_id": subscription_id,
                "price": subscription.price,
                "start_date": str(subscription.start_date),
                "end_date": str(subscription.end_date),
            },
        )
        return subscription

    @trace_span
    async def delete(self, subscription_id: int) -> None:
        """
        Delete a subscription. The cache entry is evicted even if the delete fails.

        Raises:
            NotFoundError: If no subscription had this ID
        """
        try:
            deleted = await self.repository.delete(subscription_id)
        finally:
            await self._evict_cached(subscription_id)

        if not deleted:
            raise NotFoundError(f"Subscription {subscription_id} not found")

        logger.info(f"Deleted subscription {subscription_id}")

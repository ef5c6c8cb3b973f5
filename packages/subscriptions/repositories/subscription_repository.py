"""
Repository for subscription records.
"""

from typing import List, Optional
from sqlalchemy import select, func, or_

from common.repositories.base import BaseRepository
from common.core.otel_exporter import trace_span
from packages.subscriptions.models.database.subscription import SubscriptionEntity
from packages.subscriptions.models.domain.subscription import (
    Subscription,
    SubscriptionFilter,
)
from packages.subscriptions.repositories.interface import (
    SubscriptionRepositoryInterface,
)


class SubscriptionRepository(
    BaseRepository[SubscriptionEntity, Subscription], SubscriptionRepositoryInterface
):
    """SQL-backed subscription repository."""

    def __init__(self, db_session=None):
        super().__init__(SubscriptionEntity, Subscription, db_session)

    def _apply_filters(self, query, filters: SubscriptionFilter):
        if filters.user_id is not None:
            query = query.where(SubscriptionEntity.user_id == filters.user_id)
        if filters.service_name is not None:
            query = query.where(SubscriptionEntity.service_name == filters.service_name)
        if filters.max_start_date is not None:
            query = query.where(SubscriptionEntity.start_date <= filters.max_start_date)
        if filters.min_end_date is not None:
            query = query.where(
                or_(
                    SubscriptionEntity.end_date.is_(None),
                    SubscriptionEntity.end_date <= filters.min_end_date,
                )
            )
        return query

    @trace_span
    async def list(
        self, filters: SubscriptionFilter, skip: int = 0, limit: Optional[int] = None
    ) -> List[Subscription]:
        query = self._apply_filters(select(SubscriptionEntity), filters)
        query = query.order_by(SubscriptionEntity.id).offset(skip)
        if limit is not None:
            query = query.limit(limit)

        async with self._get_session(readonly=True) as session:
            result = await session.execute(query)
            return self._entities_to_domain(result.scalars().all())

    @trace_span
    async def sum_prices(self, filters: SubscriptionFilter) -> int:
        query = self._apply_filters(
            select(func.coalesce(func.sum(SubscriptionEntity.price), 0)), filters
        )

        async with self._get_session(readonly=True) as session:
            result = await session.execute(query)
            return int(result.scalar_one())

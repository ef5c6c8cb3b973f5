"""
Month-deduplicated spend totals.
"""

from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Set, Tuple

from common.core.config import settings
from common.core.constants import OpenEndedPolicy
from common.core.otel_exporter import trace_span, get_logger
from packages.subscriptions.models.domain.subscription import (
    Subscription,
    SubscriptionFilter,
)
from packages.subscriptions.models.domain.year_month import YearMonth
from packages.subscriptions.services.subscription_store import SubscriptionStore

logger = get_logger(__name__)

BillingKey = Tuple[str, str, YearMonth]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def overlaps_window(subscription: Subscription, filters: SubscriptionFilter) -> bool:
    """
    Check whether a subscription's billed months intersect the query window.

    The window runs from ``max_start_date`` to ``min_end_date``; either side
    may be open.
    """
    if (
        filters.max_start_date is not None
        and subscription.end_date is not None
        and subscription.end_date < filters.max_start_date
    ):
        return False
    if (
        filters.min_end_date is not None
        and subscription.start_date > filters.min_end_date
    ):
        return False
    return True


def billing_order(subscriptions: Iterable[Subscription]) -> List[Subscription]:
    """
    Order in which subscriptions claim overlapping months.

    Latest start first, then highest ID, so a re-priced row wins the months it
    shares with the row it replaced.
    """
    return sorted(
        subscriptions, key=lambda sub: (sub.start_date, sub.id), reverse=True
    )


class SpendAggregator:
    """
    Sums monthly prices, counting each (user, service, month) at most once.

    Open-ended subscriptions are handled according to ``open_ended_policy``:
    EXCLUDE skips them, THROUGH_CURRENT_MONTH bills them up to the month
    reported by ``clock``.
    """

    def __init__(
        self,
        store: SubscriptionStore,
        open_ended_policy: Optional[OpenEndedPolicy] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.open_ended_policy = open_ended_policy or settings.spend_open_ended_policy
        self.clock = clock

    def _open_ended_until(self) -> Optional[YearMonth]:
        if self.open_ended_policy == OpenEndedPolicy.THROUGH_CURRENT_MONTH:
            return YearMonth.from_date(self.clock())
        return None

    @trace_span
    async def sum_deduplicated(self, filters: SubscriptionFilter) -> int:
        """
        Total spend over matching subscriptions with month-level deduplication.

        Raises:
            StorageError: If listing subscriptions failed
        """
        candidates = await self.store.list(filters)
        open_ended_until = self._open_ended_until()

        seen: Set[BillingKey] = set()
        total = 0
        for subscription in billing_order(
            sub for sub in candidates if overlaps_window(sub, filters)
        ):
            for month in subscription.billed_months(until=open_ended_until):
                key = (subscription.user_id, subscription.service_name, month)
                if key in seen:
                    continue
                seen.add(key)
                total += subscription.price

        logger.info(
            f"Deduplicated spend {total} over {len(seen)} billed months "
            f"from {len(candidates)} subscriptions, user: {filters.user_id}, "
            f"service: {filters.service_name}"
        )
        return total

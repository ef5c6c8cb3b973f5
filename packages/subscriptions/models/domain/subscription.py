"""
Domain models for subscriptions.
"""

from typing import Optional, Iterator
from pydantic import BaseModel, ConfigDict

from packages.subscriptions.models.domain.year_month import YearMonth


class Subscription(BaseModel):
    """
    A user's subscription to a paid service.

    The user is billed ``price`` for every calendar month from ``start_date``
    through ``end_date`` inclusive. ``end_date`` of None means still active.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    service_name: str
    price: int
    user_id: str
    start_date: YearMonth
    end_date: Optional[YearMonth] = None

    @property
    def is_open_ended(self) -> bool:
        return self.end_date is None

    def billed_months(self, until: Optional[YearMonth] = None) -> Iterator[YearMonth]:
        """
        Months this subscription is billed for.

        Open-ended subscriptions need ``until`` to bound the walk and yield
        nothing without it.
        """
        last = self.end_date or until
        if last is None:
            return iter(())
        return self.start_date.months_through(last)


class SubscriptionCreateModel(BaseModel):
    """Model for creating a new subscription."""

    service_name: str
    price: int
    user_id: str
    start_date: Optional[YearMonth] = None
    end_date: Optional[YearMonth] = None


class SubscriptionUpdateModel(BaseModel):
    """
    Model for updating a subscription.

    Replaces every mutable field; ``service_name`` and ``user_id`` are fixed
    at creation. An ``end_date`` of None reopens the subscription.
    """

    price: int
    start_date: Optional[YearMonth] = None
    end_date: Optional[YearMonth] = None


class SubscriptionFilter(BaseModel):
    """
    Filter shared by list, sum and spend aggregation.

    Bounds are inclusive. Open-ended subscriptions always pass ``min_end_date``.
    """

    user_id: Optional[str] = None
    service_name: Optional[str] = None
    max_start_date: Optional[YearMonth] = None
    min_end_date: Optional[YearMonth] = None

    def matches(self, subscription: Subscription) -> bool:
        if self.user_id is not None and subscription.user_id != self.user_id:
            return False
        if (
            self.service_name is not None
            and subscription.service_name != self.service_name
        ):
            return False
        if (
            self.max_start_date is not None
            and subscription.start_date > self.max_start_date
        ):
            return False
        if (
            self.min_end_date is not None
            and subscription.end_date is not None
            and subscription.end_date > self.min_end_date
        ):
            return False
        return True

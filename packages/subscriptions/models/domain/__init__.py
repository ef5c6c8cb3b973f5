from packages.subscriptions.models.domain.year_month import YearMonth
from packages.subscriptions.models.domain.subscription import (
    Subscription,
    SubscriptionCreateModel,
    SubscriptionUpdateModel,
    SubscriptionFilter,
)

__all__ = [
    "YearMonth",
    "Subscription",
    "SubscriptionCreateModel",
    "SubscriptionUpdateModel",
    "SubscriptionFilter",
]

"""Subscription repositories."""

from packages.subscriptions.repositories.interface import (
    SubscriptionRepositoryInterface,
)
from packages.subscriptions.repositories.subscription_repository import (
    SubscriptionRepository,
)
from packages.subscriptions.repositories.memory_subscription_repository import (
    InMemorySubscriptionRepository,
)

__all__ = [
    "SubscriptionRepositoryInterface",
    "SubscriptionRepository",
    "InMemorySubscriptionRepository",
]

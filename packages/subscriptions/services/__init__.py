from packages.subscriptions.services.subscription_store import SubscriptionStore
from packages.subscriptions.services.spend_aggregator import SpendAggregator

__all__ = ["SubscriptionStore", "SpendAggregator"]

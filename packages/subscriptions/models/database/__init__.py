from packages.subscriptions.models.database.subscription import SubscriptionEntity

__all__ = ["SubscriptionEntity"]

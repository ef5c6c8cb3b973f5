"""Cache key generators for subscriptions package."""


def subscription_by_id_key(subscription_id: int) -> str:
    """Generate cache key for subscription by ID."""
    return f"sub:{subscription_id}"

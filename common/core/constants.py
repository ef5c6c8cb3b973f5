from enum import Enum


class Environment(str, Enum):
    """Environment profiles."""

    LOCAL = "local"
    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


class CacheProvider(str, Enum):
    """Cache provider types."""

    REDIS = "redis"
    MEMORY = "memory"
    NONE = "none"


class OpenEndedPolicy(str, Enum):
    """How spend aggregation treats subscriptions without an end date."""

    EXCLUDE = "exclude"
    THROUGH_CURRENT_MONTH = "through_current_month"

from typing import Optional

from common.core.config import settings
from common.core.constants import CacheProvider
from common.core.otel_exporter import get_logger

from .interface import CacheInterface
from .memory_cache import MemoryCache
from .passthrough_cache import PassthroughCache
from .redis_cache import RedisCache

logger = get_logger(__name__)

# Process-wide instance, handed to services through dependency injection
_cache_provider: Optional[CacheInterface] = None


def get_cache_provider() -> CacheInterface:
    """
    Get the configured cache provider.

    Returns:
        CacheInterface: The cache provider instance
    """
    global _cache_provider

    if _cache_provider is None:
        if settings.cache_provider == CacheProvider.MEMORY:
            _cache_provider = MemoryCache()
        elif settings.cache_provider == CacheProvider.NONE:
            _cache_provider = PassthroughCache()
        else:
            _cache_provider = RedisCache()
        logger.info(f"Initialized {settings.cache_provider.value} cache provider")

    return _cache_provider

import json
from typing import Any, Optional
import redis.asyncio as redis
from redis.exceptions import RedisError

from common.core.config import settings
from common.core.exceptions import CacheError
from .interface import CacheInterface
from common.core.otel_exporter import (
    get_logger,
    trace_span,
    create_span_with_context,
)

logger = get_logger(__name__)


class RedisCache(CacheInterface):
    """
    Redis-based cache implementation.

    Values are stored as JSON strings. Backend failures are raised as
    ``CacheError`` so callers can decide to degrade to a miss.
    """

    def __init__(self, client: Optional[redis.Redis] = None):
        self.host = settings.redis_host
        self.port = settings.redis_port
        self.password = settings.redis_password
        self.db = settings.redis_db
        self._client: Optional[redis.Redis] = client
        self._connected = client is not None

    @trace_span
    async def connect(self) -> bool:
        """Connect to Redis."""
        try:
            self._client = redis.Redis(
                host=self.host,
                port=self.port,
                password=self.password,
                db=self.db,
                decode_responses=True,
            )
            await self._client.ping()
            self._connected = True
            logger.info("Redis cache provider connected")
            return True
        except RedisError as e:
            logger.error(f"Failed to connect to Redis cache: {e}")
            self._connected = False
            return False

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self._client:
            await self._client.aclose()
            self._connected = False
            logger.info("Redis cache provider disconnected")

    async def _ensure_connected(self) -> None:
        """Ensure Redis connection is active."""
        if self._connected:
            return
        if not await self.connect():
            raise CacheError(f"Redis cache unavailable at {self.host}:{self.port}")

    @trace_span
    async def get(self, key: str) -> Optional[Any]:
        await self._ensure_connected()

        try:
            value = await self._client.get(key)
        except RedisError as e:
            raise CacheError(f"Error getting cache key {key}") from e

        if value is None:
            return None

        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            raise CacheError(f"Failed to deserialize cached value for key {key}") from e

    @trace_span
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        await self._ensure_connected()

        with create_span_with_context("set_value"):
            serialized_value = json.dumps(value, default=str)
            try:
                if ttl:
                    success = await self._client.setex(key, ttl, serialized_value)
                else:
                    success = await self._client.set(key, serialized_value)
            except RedisError as e:
                raise CacheError(f"Error setting cache key {key}") from e

        if success:
            logger.debug(f"Cached key {key} with TTL {ttl}")
        return bool(success)

    @trace_span
    async def delete(self, key: str) -> bool:
        await self._ensure_connected()

        try:
            deleted = await self._client.delete(key)
        except RedisError as e:
            raise CacheError(f"Error deleting cache key {key}") from e

        if deleted:
            logger.debug(f"Deleted cache key {key}")
        return bool(deleted)

    @trace_span
    async def exists(self, key: str) -> bool:
        await self._ensure_connected()

        try:
            return bool(await self._client.exists(key))
        except RedisError as e:
            raise CacheError(f"Error checking if cache key {key} exists") from e

    @trace_span
    async def clear(self) -> bool:
        await self._ensure_connected()

        try:
            await self._client.flushdb()
        except RedisError as e:
            raise CacheError("Error clearing cache") from e
        logger.info("Cleared all cache data")
        return True

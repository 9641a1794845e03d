"""
Redis-based tier implementations for oauthstore.

RedisPropertyStore keeps all properties in one Redis hash, which makes the
store enumerable. RedisSharedCache stores each entry as its own key with an
expiry, so Redis drops stale entries by itself.
"""

import logging
from typing import List, Optional, Union

import redis

from .types import PropertyStore, SharedCache, StorageConnectionError, StorageError


logger = logging.getLogger(__name__)


def _connect(client: Optional[redis.Redis], url: str) -> redis.Redis:
    if client is not None:
        return client
    logger.info(f"Connecting to Redis at {url}")
    return redis.Redis.from_url(url, decode_responses=True)


def _text(value: Union[str, bytes, None]) -> Optional[str]:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def _wrap(operation: str, key: str, error: redis.RedisError) -> StorageError:
    logger.error(f"Redis {operation} failed for {key!r}: {error}")
    if isinstance(error, (redis.ConnectionError, redis.TimeoutError)):
        return StorageConnectionError(operation, key, str(error), error)
    return StorageError(operation, key, str(error), error)


class RedisPropertyStore(PropertyStore):
    """
    Durable property store backed by a Redis hash.

    Durability is whatever the Redis server's persistence settings give.
    """

    def __init__(self,
                 client: Optional[redis.Redis] = None,
                 url: str = "redis://localhost:6379/0",
                 hash_key: str = "oauthstore:properties"):
        """
        Initialize Redis property store.

        Args:
            client: Existing Redis client; takes precedence over url
            url: Redis URL used when no client is given
            hash_key: Name of the hash holding the properties
        """
        self._redis = _connect(client, url)
        self.hash_key = hash_key

    def get(self, key: str) -> Optional[str]:
        try:
            return _text(self._redis.hget(self.hash_key, key))
        except redis.RedisError as e:
            raise _wrap("get", key, e) from e

    def set(self, key: str, value: str) -> None:
        try:
            self._redis.hset(self.hash_key, key, value)
        except redis.RedisError as e:
            raise _wrap("set", key, e) from e

    def delete(self, key: str) -> None:
        try:
            self._redis.hdel(self.hash_key, key)
        except redis.RedisError as e:
            raise _wrap("delete", key, e) from e

    def list_keys(self) -> List[str]:
        try:
            return [_text(k) for k in self._redis.hkeys(self.hash_key)]
        except redis.RedisError as e:
            raise _wrap("list_keys", self.hash_key, e) from e


class RedisSharedCache(SharedCache):
    """Shared cache backed by expiring Redis keys."""

    def __init__(self,
                 client: Optional[redis.Redis] = None,
                 url: str = "redis://localhost:6379/0",
                 key_prefix: str = "oauthstore:cache:"):
        """
        Initialize Redis shared cache.

        Args:
            client: Existing Redis client; takes precedence over url
            url: Redis URL used when no client is given
            key_prefix: Prefix for Redis keys
        """
        self._redis = _connect(client, url)
        self.key_prefix = key_prefix

    def _get_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            return _text(self._redis.get(self._get_key(key)))
        except redis.RedisError as e:
            raise _wrap("get", key, e) from e

    def put(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            self._redis.setex(self._get_key(key), ttl_seconds, value)
        except redis.RedisError as e:
            raise _wrap("put", key, e) from e

    def remove(self, key: str) -> None:
        try:
            self._redis.delete(self._get_key(key))
        except redis.RedisError as e:
            raise _wrap("remove", key, e) from e

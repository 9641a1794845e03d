"""
In-memory tier implementations for oauthstore.
Suitable for development, testing and single-process deployments.
"""

import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from .types import PropertyStore, SharedCache


logger = logging.getLogger(__name__)


class MemoryPropertyStore(PropertyStore):
    """
    In-memory property store.

    Note: All data is lost when the process terminates, so this only stands
    in for a durable store in tests and throwaway setups.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._properties: Dict[str, str] = dict(initial or {})
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._properties.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._properties[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._properties.pop(key, None)

    def list_keys(self) -> List[str]:
        with self._lock:
            return list(self._properties)

    def __len__(self) -> int:
        with self._lock:
            return len(self._properties)


class MemorySharedCache(SharedCache):
    """
    In-memory cache with per-entry expiry.

    Expired entries are dropped lazily when read. The clock is injectable
    so tests can move time forward.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        # key -> (value, expires_at)
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._clock = clock
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            item = self._entries.get(key)
            if item is None:
                return None
            value, expires_at = item
            if self._clock() >= expires_at:
                del self._entries[key]
                logger.debug(f"Cache entry {key} expired")
                return None
            return value

    def put(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)

    def remove(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def cleanup(self) -> int:
        """
        Remove expired entries.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [k for k, (_, expires_at) in self._entries.items() if now >= expires_at]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug(f"Cleaned up {len(expired)} expired cache entries")
        return len(expired)

"""
Process-local cache tier.
"""

from typing import Dict, List, Optional

from .types import CacheEntry


class LocalCache:
    """
    In-memory map of prefixed keys to cache entries.

    Lives as long as its owner and never expires entries on its own.
    Not thread-safe.
    """

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def put(self, key: str, entry: CacheEntry) -> None:
        self._entries[key] = entry

    def remove(self, key: str) -> None:
        self._entries.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._entries)

    def clear(self) -> None:
        """Drop every entry, as a fresh process would see it."""
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

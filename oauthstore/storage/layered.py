"""
Layered storage for OAuth2 authorization state.

A Storage instance owns one key namespace and spreads it over three tiers:
a process-local cache, an optional shared cache with expiring entries, and
an optional durable property store. Reads go fastest tier first and fill
the faster tiers on the way back; writes go to every tier.
"""

import logging
from typing import List, Optional

from ..backends.types import PropertyStore, SharedCache
from .local import LocalCache
from .types import (
    CacheEntry,
    Found,
    JsonValue,
    NOT_FOUND,
    StorageOptions,
    decode_entry,
    deserialize_value,
    encode_entry,
    serialize_value,
)


logger = logging.getLogger(__name__)


class Storage:
    """
    Namespaced get/set/remove/reset over local, shared and durable tiers.

    Misses are remembered as NotFound entries in the local tier and the
    shared cache, never in the durable store. Tier failures propagate
    unchanged and writes are not transactional across tiers.

    Storing None and never storing anything both read back as None.
    """

    def __init__(self,
                 prefix: str,
                 property_store: Optional[PropertyStore] = None,
                 cache: Optional[SharedCache] = None,
                 options: Optional[StorageOptions] = None):
        """
        Initialize storage.

        Args:
            prefix: Namespace for every key of this instance
            property_store: Durable store, if any
            cache: Shared cache, if any
            options: TTL and negative caching settings
        """
        self.prefix = prefix
        self.property_store = property_store
        self.cache = cache
        self.options = options or StorageOptions()
        self.local_cache = LocalCache()

    def get_prefixed_key(self, key: Optional[str] = None) -> str:
        """Return the tier key for ``key``; no key means the bare prefix."""
        if key:
            return f"{self.prefix}.{key}"
        return self.prefix

    def get_value(self, key: Optional[str] = None, skip_local_cache: bool = False) -> JsonValue:
        """
        Get a stored value.

        Args:
            key: Key within this namespace
            skip_local_cache: Bypass the process-local tier for this read

        Returns:
            The stored value, or None if there is none
        """
        prefixed_key = self.get_prefixed_key(key)

        if not skip_local_cache:
            entry = self.local_cache.get(prefixed_key)
            if entry is not None:
                return _unwrap(entry)

        if self.cache is not None:
            raw = self.cache.get(prefixed_key)
            if raw is not None:
                entry = decode_entry(raw)
                self.local_cache.put(prefixed_key, entry)
                logger.debug(f"Shared cache hit for {prefixed_key}")
                return _unwrap(entry)

        if self.property_store is not None:
            raw = self.property_store.get(prefixed_key)
            if raw is not None:
                value = deserialize_value(raw)
                entry = Found(value)
                if self.cache is not None:
                    self.cache.put(prefixed_key, encode_entry(entry), self.options.cache_ttl_seconds)
                self.local_cache.put(prefixed_key, entry)
                logger.debug(f"Property store hit for {prefixed_key}")
                return value

        logger.debug(f"No value for {prefixed_key}")
        if self.options.negative_caching:
            self.local_cache.put(prefixed_key, NOT_FOUND)
            if self.cache is not None:
                self.cache.put(prefixed_key, encode_entry(NOT_FOUND), self.options.cache_ttl_seconds)
        return None

    def set_value(self, key: Optional[str], value: JsonValue) -> None:
        """
        Store a value in every tier.

        Raises:
            TypeError: If the value is not JSON serializable
        """
        prefixed_key = self.get_prefixed_key(key)
        raw = serialize_value(value)
        if self.property_store is not None:
            self.property_store.set(prefixed_key, raw)
        if self.cache is not None:
            self.cache.put(prefixed_key, encode_entry(Found(value)), self.options.cache_ttl_seconds)
        self.local_cache.put(prefixed_key, Found(value))

    def remove_value(self, key: Optional[str] = None) -> None:
        """Remove a value from every tier. Absent keys are ignored."""
        self._remove_prefixed_key(self.get_prefixed_key(key))

    def reset(self) -> None:
        """
        Remove every key in this namespace.

        Keys come from the property store when there is one, otherwise from
        the local tier. The shared cache cannot be listed, so without a
        property store, entries that only live there stay until they expire.
        """
        prefixed_keys = self._namespace_keys()
        for prefixed_key in prefixed_keys:
            self._remove_prefixed_key(prefixed_key)
        logger.debug(f"Reset {self.prefix}: removed {len(prefixed_keys)} keys")

    def _namespace_keys(self) -> List[str]:
        if self.property_store is None:
            return self.local_cache.keys()
        prefix = self.get_prefixed_key()
        return [k for k in self.property_store.list_keys()
                if k == prefix or k.startswith(prefix + ".")]

    def _remove_prefixed_key(self, prefixed_key: str) -> None:
        if self.property_store is not None:
            self.property_store.delete(prefixed_key)
        if self.cache is not None:
            self.cache.remove(prefixed_key)
        self.local_cache.remove(prefixed_key)


def _unwrap(entry: CacheEntry) -> JsonValue:
    if isinstance(entry, Found):
        return entry.value
    return None

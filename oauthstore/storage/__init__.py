"""
Layered storage package for oauthstore.

Provides the Storage facade over process-local, shared and durable tiers,
and the cache entry types it keeps in the faster tiers.
"""

from .types import (
    JsonValue,
    Found,
    NotFound,
    NOT_FOUND,
    CacheEntry,
    CorruptEntryError,
    StorageOptions,
    DEFAULT_CACHE_TTL_SECONDS,
    encode_entry,
    decode_entry,
)

from .local import LocalCache

from .layered import Storage

__all__ = [
    # Values and entries
    "JsonValue",
    "Found",
    "NotFound",
    "NOT_FOUND",
    "CacheEntry",
    "CorruptEntryError",
    "StorageOptions",
    "DEFAULT_CACHE_TTL_SECONDS",
    "encode_entry",
    "decode_entry",

    # Tiers
    "LocalCache",
    "Storage",
]

"""
Value and cache entry types for the layered storage.

Values are JSON data. Cache tiers hold a tagged entry, either ``Found``
wrapping a value or ``NotFound`` recording a confirmed miss, so a miss can
never be confused with a stored value.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Union


JsonValue = Union[None, bool, int, float, str, List["JsonValue"], Dict[str, "JsonValue"]]

# Shared cache TTL used when no options are given, in seconds (6 hours).
DEFAULT_CACHE_TTL_SECONDS = 21600


class CorruptEntryError(ValueError):
    """Raised when a cached entry decodes as JSON but has the wrong shape."""

    def __init__(self, raw: str, message: str = "malformed cache entry"):
        self.raw = raw
        super().__init__(f"{message}: {raw[:80]!r}")


@dataclass(frozen=True)
class Found:
    """A cache entry holding a stored value."""
    value: JsonValue


@dataclass(frozen=True)
class NotFound:
    """A cache entry recording that the key had no value anywhere."""


NOT_FOUND = NotFound()

CacheEntry = Union[Found, NotFound]


@dataclass
class StorageOptions:
    """
    Tunables for a Storage instance.

    Attributes:
        cache_ttl_seconds: Lifetime of shared cache entries, positive and negative
        negative_caching: Whether misses are recorded in the cache tiers
    """
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    negative_caching: bool = True

    def __post_init__(self):
        if self.cache_ttl_seconds <= 0:
            raise ValueError("cache_ttl_seconds must be positive")


def serialize_value(value: JsonValue) -> str:
    """Encode a value for the durable store."""
    return json.dumps(value)


def deserialize_value(raw: str) -> JsonValue:
    """Decode a value read from the durable store."""
    return json.loads(raw)


def encode_entry(entry: CacheEntry) -> str:
    """
    Encode a cache entry for the shared cache.

    Found entries become ``{"found": true, "value": ...}`` and misses become
    ``{"found": false}``.
    """
    if isinstance(entry, Found):
        return json.dumps({"found": True, "value": entry.value})
    return json.dumps({"found": False})


def decode_entry(raw: str) -> CacheEntry:
    """
    Decode a shared cache entry.

    Raises:
        json.JSONDecodeError: If the entry is not JSON
        CorruptEntryError: If the entry is JSON but not an envelope
    """
    data: Any = json.loads(raw)
    if not isinstance(data, dict) or not isinstance(data.get("found"), bool):
        raise CorruptEntryError(raw)
    if not data["found"]:
        return NOT_FOUND
    if "value" not in data:
        raise CorruptEntryError(raw, "found entry without value")
    return Found(data["value"])

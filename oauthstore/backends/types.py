"""
Tier interfaces and error types for oauthstore backends.

Defines the durable property store and shared cache abstractions that the
layered Storage consumes. Both work on raw strings; encoding is the
caller's job.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class StorageError(Exception):
    """Base class for backend failures."""

    def __init__(self, operation: str, key: str = "", message: str = "",
                 cause: Optional[Exception] = None):
        self.operation = operation
        self.key = key
        self.message = message
        self.cause = cause
        super().__init__(f"Storage error in {operation}: {message}")


class StorageConnectionError(StorageError):
    """Raised when a backend server cannot be reached."""
    pass


class ConfigurationError(ValueError):
    """Raised when a storage configuration is invalid."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("Invalid storage configuration: " + "; ".join(errors))


class PropertyStore(ABC):
    """
    Durable, authoritative key-value store.

    Values survive process restarts. Calls are expected to be slow
    relative to the cache tiers, so Storage avoids them where it can.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a raw value.

        Args:
            key: Fully prefixed key

        Returns:
            The stored string, or None if the key is absent
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Write a raw value, replacing any previous one."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete a key. Deleting an absent key is a no-op."""
        pass

    @abstractmethod
    def list_keys(self) -> List[str]:
        """Return every key currently held by the store."""
        pass


class SharedCache(ABC):
    """
    Fast cache shared between executions, with per-entry expiry.

    Not enumerable and not authoritative.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Read a raw entry, or None if absent or expired."""
        pass

    @abstractmethod
    def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Write a raw entry that expires after ttl_seconds."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove an entry. Removing an absent entry is a no-op."""
        pass

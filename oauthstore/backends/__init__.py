"""
Storage tier package for oauthstore.

This package provides the durable property store and shared cache
interfaces consumed by the layered Storage, along with in-memory,
file-based and Redis-based implementations and a configuration factory.
"""

from .types import (
    # Interfaces
    PropertyStore,
    SharedCache,

    # Errors
    StorageError,
    StorageConnectionError,
    ConfigurationError,
)

from .memory import (
    MemoryPropertyStore,
    MemorySharedCache,
)

from .file import FilePropertyStore

from .distributed import (
    RedisPropertyStore,
    RedisSharedCache,
)

from .factory import (
    StorageConfig,
    create_property_store,
    create_cache,
    register_property_store,
    register_cache,
    get_available_types,
    load_storage_config,
)

__all__ = [
    # Interfaces
    "PropertyStore",
    "SharedCache",

    # Errors
    "StorageError",
    "StorageConnectionError",
    "ConfigurationError",

    # Implementations
    "MemoryPropertyStore",
    "MemorySharedCache",
    "FilePropertyStore",
    "RedisPropertyStore",
    "RedisSharedCache",

    # Factory
    "StorageConfig",
    "create_property_store",
    "create_cache",
    "register_property_store",
    "register_cache",
    "get_available_types",
    "load_storage_config",
]

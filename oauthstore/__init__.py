"""
oauthstore Python Package

Layered storage for OAuth2 client state: a process-local cache, a shared
expiring cache and a durable property store behind one get/set/remove/reset API.
"""

__version__ = "0.1.0"

from .storage import Storage, StorageOptions, Found, NotFound, CorruptEntryError
from .backends import (
    PropertyStore,
    SharedCache,
    MemoryPropertyStore,
    MemorySharedCache,
    FilePropertyStore,
    RedisPropertyStore,
    RedisSharedCache,
    StorageConfig,
    StorageError,
    ConfigurationError,
    load_storage_config,
)
from .service import (
    STORAGE_PREFIX,
    ServiceStorage,
    create_service_storage,
    create_storage_from_config,
    get_service_names,
)

__all__ = [
    "Storage",
    "StorageOptions",
    "Found",
    "NotFound",
    "CorruptEntryError",
    "PropertyStore",
    "SharedCache",
    "MemoryPropertyStore",
    "MemorySharedCache",
    "FilePropertyStore",
    "RedisPropertyStore",
    "RedisSharedCache",
    "StorageConfig",
    "StorageError",
    "ConfigurationError",
    "load_storage_config",
    "STORAGE_PREFIX",
    "ServiceStorage",
    "create_service_storage",
    "create_storage_from_config",
    "get_service_names",
]

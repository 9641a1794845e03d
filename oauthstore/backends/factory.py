"""
Factory for creating storage tiers.
Provides a centralized way to configure property stores and shared caches.
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from ..storage.types import DEFAULT_CACHE_TTL_SECONDS
from ..util.config import (
    ENV_PREFIX,
    load_config_file,
    load_config_from_env,
    merge_configs,
    parse_bool,
    parse_ttl_seconds,
    validate_config,
)
from .distributed import RedisPropertyStore, RedisSharedCache
from .file import FilePropertyStore
from .memory import MemoryPropertyStore, MemorySharedCache
from .types import ConfigurationError, PropertyStore, SharedCache


logger = logging.getLogger(__name__)

NONE_TYPE = "none"



@dataclass
class StorageConfig:
    """Configuration for the storage tiers."""
    property_store: str = "memory"
    cache: str = NONE_TYPE
    file_path: Optional[str] = None
    redis_url: str = "redis://localhost:6379/0"
    redis_hash_key: str = "oauthstore:properties"
    cache_key_prefix: str = "oauthstore:cache:"
    cache_ttl: Union[int, str] = DEFAULT_CACHE_TTL_SECONDS
    negative_caching: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StorageConfig':
        """
        Create from a dictionary, ignoring None values.

        Raises:
            ConfigurationError: If the dictionary has unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError([f"Unknown field: {name}" for name in unknown])

        values = {k: v for k, v in data.items() if v is not None}
        if 'negative_caching' in values:
            values['negative_caching'] = parse_bool(values['negative_caching'])
        return cls(**values)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> 'StorageConfig':
        """Create from OAUTHSTORE_* environment variables."""
        known = {f.name for f in fields(cls)}
        env = {k: v for k, v in load_config_from_env(prefix).items() if k in known}
        return cls.from_dict(env)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'StorageConfig':
        """Create from a JSON or YAML file."""
        return cls.from_dict(load_config_file(file_path))

    def ttl_seconds(self) -> int:
        """Return the cache TTL in seconds."""
        return parse_ttl_seconds(self.cache_ttl)

    def validate(self) -> None:
        """
        Check the configuration.

        Raises:
            ConfigurationError: Listing every problem found
        """
        schema = {
            'property_store': {'required': True, 'type': str,
                               'choices': get_available_types()['property_store']},
            'cache': {'required': True, 'type': str,
                      'choices': get_available_types()['cache']},
            'redis_url': {'type': str},
            'negative_caching': {'type': bool},
        }
        errors = validate_config(self.to_dict(), schema)

        if self.property_store == "file" and not self.file_path:
            errors.append("file_path is required for the file property store")

        try:
            if self.ttl_seconds() <= 0:
                errors.append("cache_ttl must be positive")
        except ValueError as e:
            errors.append(f"Invalid cache_ttl: {e}")

        if errors:
            raise ConfigurationError(errors)


PropertyStoreBuilder = Callable[[StorageConfig], PropertyStore]
CacheBuilder = Callable[[StorageConfig], SharedCache]

# Registries of available tier implementations
_PROPERTY_STORES: Dict[str, PropertyStoreBuilder] = {
    'memory': lambda config: MemoryPropertyStore(),
    'file': lambda config: FilePropertyStore(config.file_path),
    'redis': lambda config: RedisPropertyStore(url=config.redis_url,
                                               hash_key=config.redis_hash_key),
}

_CACHES: Dict[str, CacheBuilder] = {
    'memory': lambda config: MemorySharedCache(),
    'redis': lambda config: RedisSharedCache(url=config.redis_url,
                                             key_prefix=config.cache_key_prefix),
}


def register_property_store(name: str, builder: PropertyStoreBuilder) -> None:
    """
    Register a property store implementation.

    Args:
        name: Name to register the implementation under
        builder: Callable creating the store from a StorageConfig
    """
    _PROPERTY_STORES[name.lower()] = builder


def register_cache(name: str, builder: CacheBuilder) -> None:
    """Register a shared cache implementation."""
    _CACHES[name.lower()] = builder


def get_available_types() -> Dict[str, List[str]]:
    """Get the registered tier types, including 'none'."""
    return {
        'property_store': list(_PROPERTY_STORES) + [NONE_TYPE],
        'cache': list(_CACHES) + [NONE_TYPE],
    }


def create_property_store(config: StorageConfig) -> Optional[PropertyStore]:
    """
    Create the property store described by the configuration.

    Returns:
        The store, or None when the type is 'none'

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    config.validate()
    store_type = config.property_store
    if store_type == NONE_TYPE:
        return None
    logger.info(f"Creating {store_type} property store")
    return _PROPERTY_STORES[store_type](config)


def create_cache(config: StorageConfig) -> Optional[SharedCache]:
    """
    Create the shared cache described by the configuration.

    Returns:
        The cache, or None when the type is 'none'
    """
    config.validate()
    cache_type = config.cache
    if cache_type == NONE_TYPE:
        return None
    logger.info(f"Creating {cache_type} shared cache")
    return _CACHES[cache_type](config)


def load_storage_config(file_path: Optional[Union[str, Path]] = None,
                        env_prefix: str = ENV_PREFIX) -> StorageConfig:
    """
    Build a configuration from defaults, an optional file and the environment.
    Environment variables win over the file.
    """
    known = {f.name for f in fields(StorageConfig)}
    file_values = load_config_file(file_path) if file_path else {}
    env_values = {k: v for k, v in load_config_from_env(env_prefix).items() if k in known}
    return StorageConfig.from_dict(merge_configs(file_values, env_values))

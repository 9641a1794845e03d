"""
OAuth2 service helpers built on the layered Storage.

Each OAuth2 service keeps its state in a Storage namespaced as
``oauth2.<service name>``. The token itself lives in the bare namespace
slot; other state, such as the PKCE code verifier, lives under named keys.
"""

import logging
from typing import List, Optional

from ..backends.factory import StorageConfig, create_cache, create_property_store
from ..backends.types import PropertyStore, SharedCache
from ..storage.layered import Storage
from ..storage.types import JsonValue, StorageOptions


logger = logging.getLogger(__name__)

STORAGE_PREFIX = "oauth2."

CODE_VERIFIER_KEY = "code_verifier"


def create_service_storage(service_name: str,
                           property_store: Optional[PropertyStore] = None,
                           cache: Optional[SharedCache] = None,
                           options: Optional[StorageOptions] = None) -> Storage:
    """
    Create the Storage for an OAuth2 service.

    Args:
        service_name: Name of the service, unique within the property store
        property_store: Durable store shared by all services
        cache: Shared cache, if any
        options: Storage tunables

    Returns:
        Storage namespaced as ``oauth2.<service_name>``
    """
    if not service_name:
        raise ValueError("service_name is required")
    return Storage(STORAGE_PREFIX + service_name, property_store, cache, options)


def create_storage_from_config(prefix: str, config: Optional[StorageConfig] = None) -> Storage:
    """
    Create a Storage with tiers built from a StorageConfig.

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    config = config or StorageConfig()
    options = StorageOptions(cache_ttl_seconds=config.ttl_seconds(),
                             negative_caching=config.negative_caching)
    storage = Storage(prefix, create_property_store(config), create_cache(config), options)
    logger.info(f"Created storage {prefix} "
                f"(property store: {config.property_store}, cache: {config.cache})")
    return storage


def get_service_names(property_store: PropertyStore) -> List[str]:
    """
    List the services that have state in the given property store.

    Useful when the same API is used with several accounts. Names are
    returned once each, in the order first seen.
    """
    names: List[str] = []
    for key in property_store.list_keys():
        if not key.startswith(STORAGE_PREFIX):
            continue
        name = key[len(STORAGE_PREFIX):].split(".", 1)[0]
        if name and name not in names:
            names.append(name)
    return names


class ServiceStorage:
    """
    Storage view used by an OAuth2 flow.

    Exposes only what the flow needs: the token, the code verifier, and a
    full reset.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    @classmethod
    def for_service(cls, service_name: str,
                    property_store: Optional[PropertyStore] = None,
                    cache: Optional[SharedCache] = None,
                    options: Optional[StorageOptions] = None) -> 'ServiceStorage':
        return cls(create_service_storage(service_name, property_store, cache, options))

    def get_token(self, skip_local_cache: bool = False) -> JsonValue:
        """Return the stored token payload, or None."""
        return self.storage.get_value(None, skip_local_cache)

    def save_token(self, token: JsonValue) -> None:
        self.storage.set_value(None, token)

    def has_token(self) -> bool:
        return self.get_token() is not None

    def get_code_verifier(self) -> Optional[str]:
        return self.storage.get_value(CODE_VERIFIER_KEY)

    def save_code_verifier(self, code_verifier: str) -> None:
        self.storage.set_value(CODE_VERIFIER_KEY, code_verifier)

    def reset(self) -> None:
        """Forget everything stored for this service."""
        self.storage.reset()

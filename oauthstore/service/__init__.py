"""
OAuth2 service helpers for oauthstore.
"""

from .oauth2 import (
    STORAGE_PREFIX,
    CODE_VERIFIER_KEY,
    create_service_storage,
    create_storage_from_config,
    get_service_names,
    ServiceStorage,
)

__all__ = [
    "STORAGE_PREFIX",
    "CODE_VERIFIER_KEY",
    "create_service_storage",
    "create_storage_from_config",
    "get_service_names",
    "ServiceStorage",
]

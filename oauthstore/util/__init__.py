"""
Utility functions for oauthstore.
"""

from .config import (
    ENV_PREFIX,
    load_config_from_env,
    get_config_value,
    parse_bool,
    parse_duration_string,
    parse_ttl_seconds,
    merge_configs,
    validate_config,
    load_config_file,
)

__all__ = [
    "ENV_PREFIX",
    "load_config_from_env",
    "get_config_value",
    "parse_bool",
    "parse_duration_string",
    "parse_ttl_seconds",
    "merge_configs",
    "validate_config",
    "load_config_file",
]

"""
Configuration utilities for oauthstore.
Loads storage settings from environment variables and JSON/YAML files.
"""

import json
import os
import re
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml


ENV_PREFIX = "OAUTHSTORE_"

_DURATION_PATTERN = re.compile(r'^(\d+(?:\.\d+)?)\s*([smhd])$')
_DURATION_UNITS = {
    's': 'seconds',
    'm': 'minutes',
    'h': 'hours',
    'd': 'days',
}


def load_config_from_env(prefix: str = ENV_PREFIX) -> Dict[str, str]:
    """
    Collect environment variables starting with ``prefix``.
    Keys are returned without the prefix and lowercased.
    """
    return {
        key[len(prefix):].lower(): value
        for key, value in os.environ.items()
        if key.startswith(prefix)
    }


def get_config_value(key: str, default: Any = None,
                     cast_type: Optional[type] = None,
                     env_prefix: str = ENV_PREFIX) -> Any:
    """
    Get one configuration value from the environment, or the default.
    Optionally cast to the given type; unparseable values fall back to the default.
    """
    value = os.environ.get(f"{env_prefix}{key.upper()}", default)
    if value is None or cast_type is None:
        return value

    try:
        if cast_type == bool:
            return parse_bool(value)
        return cast_type(value)
    except (ValueError, TypeError):
        return default


def parse_bool(value: Any) -> bool:
    """Interpret 'true'/'1'/'yes'/'on' (any case) as True."""
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes', 'on')
    return bool(value)


def parse_duration_string(duration_str: str) -> timedelta:
    """
    Parse duration string like '30s', '5m', '6h', '1d' into timedelta.
    """
    if not isinstance(duration_str, str):
        raise ValueError("Duration must be a string")

    match = _DURATION_PATTERN.match(duration_str.strip().lower())
    if not match:
        raise ValueError(f"Invalid duration format: {duration_str}")

    value, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: float(value)})


def parse_ttl_seconds(value: Union[int, float, str, timedelta]) -> int:
    """
    Normalize a TTL given as seconds, a digit string, a duration string or a timedelta.
    """
    if isinstance(value, bool):
        raise ValueError("TTL must be a number or duration, not a bool")
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return int(parse_duration_string(value).total_seconds())


def merge_configs(*configs: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Merge configuration dictionaries.
    Later configs override earlier ones; None entries are skipped.
    """
    result: Dict[str, Any] = {}
    for config in configs:
        if isinstance(config, dict):
            result.update(config)
    return result


def validate_config(config: Dict[str, Any],
                    schema: Dict[str, Dict[str, Any]]) -> List[str]:
    """
    Validate configuration against a schema.
    Returns list of validation errors.

    Schema format:
    {
        'field_name': {
            'required': True/False,
            'type': type or tuple of types,
            'choices': [list_of_valid_values],
            'min': min_value,
        }
    }
    """
    errors = []

    for field, rules in schema.items():
        if field not in config or config[field] is None:
            if rules.get('required', False):
                errors.append(f"Missing required field: {field}")
            continue

        value = config[field]

        expected_type = rules.get('type')
        if expected_type and not isinstance(value, expected_type):
            errors.append(f"Field {field} has invalid type {type(value).__name__}")
            continue

        choices = rules.get('choices')
        if choices and value not in choices:
            errors.append(f"Field {field} must be one of: {choices}")

        min_val = rules.get('min')
        if min_val is not None and isinstance(value, (int, float)) and value < min_val:
            errors.append(f"Field {field} must be >= {min_val}")

    return errors


def load_config_file(file_path: Union[str, Path]) -> Dict[str, Any]:
    """Load configuration from a JSON or YAML file."""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    file_ext = path.suffix.lower()
    with open(path, 'r', encoding='utf-8') as f:
        if file_ext == '.json':
            data = json.load(f)
        elif file_ext in ('.yaml', '.yml'):
            data = yaml.safe_load(f)
        else:
            raise ValueError(f"Unsupported configuration file format: {file_ext}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")
    return data

"""
Tests for configuration loading and the tier factory.
"""

import os
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
import redis

from oauthstore.backends import (
    ConfigurationError,
    FilePropertyStore,
    MemoryPropertyStore,
    MemorySharedCache,
    RedisSharedCache,
    StorageConfig,
    create_cache,
    create_property_store,
    get_available_types,
    load_storage_config,
    register_cache,
    register_property_store,
)
from oauthstore.util import (
    get_config_value,
    load_config_file,
    load_config_from_env,
    merge_configs,
    parse_duration_string,
    parse_ttl_seconds,
    validate_config,
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any OAUTHSTORE_* variables from the environment"""
    for key in list(os.environ):
        if key.startswith("OAUTHSTORE_"):
            monkeypatch.delenv(key)
    return monkeypatch


class TestConfigUtils:
    """Test configuration helpers"""

    def test_parse_duration_string(self):
        assert parse_duration_string("30s") == timedelta(seconds=30)
        assert parse_duration_string("5m") == timedelta(minutes=5)
        assert parse_duration_string("6h") == timedelta(hours=6)
        assert parse_duration_string(" 1D ") == timedelta(days=1)
        assert parse_duration_string("1.5h") == timedelta(minutes=90)

    def test_parse_duration_string_invalid(self):
        with pytest.raises(ValueError):
            parse_duration_string("6 hours")
        with pytest.raises(ValueError):
            parse_duration_string(60)

    def test_parse_ttl_seconds(self):
        assert parse_ttl_seconds(21600) == 21600
        assert parse_ttl_seconds("21600") == 21600
        assert parse_ttl_seconds("6h") == 21600
        assert parse_ttl_seconds(timedelta(minutes=2)) == 120

        with pytest.raises(ValueError):
            parse_ttl_seconds(True)

    def test_load_config_from_env(self, clean_env):
        clean_env.setenv("OAUTHSTORE_CACHE", "redis")
        clean_env.setenv("OAUTHSTORE_CACHE_TTL", "1h")

        assert load_config_from_env() == {"cache": "redis", "cache_ttl": "1h"}

    def test_get_config_value(self, clean_env):
        clean_env.setenv("OAUTHSTORE_NEGATIVE_CACHING", "off")
        clean_env.setenv("OAUTHSTORE_CACHE_TTL", "not-a-number")

        assert get_config_value("negative_caching", True, bool) is False
        assert get_config_value("cache_ttl", 60, int) == 60
        assert get_config_value("missing", "x") == "x"

    def test_merge_configs(self):
        assert merge_configs({"a": 1, "b": 1}, None, {"b": 2}) == {"a": 1, "b": 2}

    def test_validate_config(self):
        schema = {
            "name": {"required": True, "type": str},
            "size": {"type": int, "min": 1},
            "mode": {"choices": ["a", "b"]},
        }

        assert validate_config({"name": "x", "size": 2, "mode": "a"}, schema) == []
        errors = validate_config({"size": 0, "mode": "c"}, schema)
        assert "Missing required field: name" in errors
        assert "Field size must be >= 1" in errors
        assert len(errors) == 3

    def test_load_config_file_json_and_yaml(self, tmp_path):
        json_path = tmp_path / "storage.json"
        json_path.write_text('{"cache": "memory"}', encoding="utf-8")
        yaml_path = tmp_path / "storage.yaml"
        yaml_path.write_text("cache: redis\ncache_ttl: 2h\n", encoding="utf-8")
        empty_path = tmp_path / "empty.yml"
        empty_path.write_text("", encoding="utf-8")

        assert load_config_file(json_path) == {"cache": "memory"}
        assert load_config_file(yaml_path) == {"cache": "redis", "cache_ttl": "2h"}
        assert load_config_file(empty_path) == {}

    def test_load_config_file_errors(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_file(tmp_path / "missing.json")

        ini_path = tmp_path / "storage.ini"
        ini_path.write_text("[x]", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config_file(ini_path)

        list_path = tmp_path / "list.yaml"
        list_path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config_file(list_path)


class TestStorageConfig:
    """Test storage configuration"""

    def test_defaults(self):
        config = StorageConfig()
        config.validate()

        assert config.property_store == "memory"
        assert config.cache == "none"
        assert config.ttl_seconds() == 21600
        assert config.negative_caching is True

    def test_from_dict(self):
        config = StorageConfig.from_dict({
            "property_store": "file",
            "file_path": "/tmp/props.json",
            "cache_ttl": "30m",
            "negative_caching": "false",
            "redis_url": None,
        })

        assert config.file_path == "/tmp/props.json"
        assert config.ttl_seconds() == 1800
        assert config.negative_caching is False
        assert config.redis_url == "redis://localhost:6379/0"

    def test_from_dict_unknown_field(self):
        with pytest.raises(ConfigurationError) as exc_info:
            StorageConfig.from_dict({"cache": "memory", "colour": "blue"})
        assert exc_info.value.errors == ["Unknown field: colour"]

    def test_from_env(self, clean_env):
        clean_env.setenv("OAUTHSTORE_CACHE", "memory")
        clean_env.setenv("OAUTHSTORE_NEGATIVE_CACHING", "0")
        clean_env.setenv("OAUTHSTORE_UNRELATED", "ignored")

        config = StorageConfig.from_env()
        assert config.cache == "memory"
        assert config.negative_caching is False

    def test_from_file(self, tmp_path):
        path = tmp_path / "storage.yml"
        path.write_text("property_store: none\ncache: memory\n", encoding="utf-8")

        config = StorageConfig.from_file(path)
        assert config.property_store == "none"
        assert config.cache == "memory"

    def test_env_overrides_file(self, tmp_path, clean_env):
        path = tmp_path / "storage.json"
        path.write_text('{"cache": "memory", "cache_ttl": 60}', encoding="utf-8")
        clean_env.setenv("OAUTHSTORE_CACHE_TTL", "2m")

        config = load_storage_config(path)
        assert config.cache == "memory"
        assert config.ttl_seconds() == 120

    def test_load_without_file(self, clean_env):
        assert load_storage_config() == StorageConfig()

    def test_validate_collects_errors(self):
        config = StorageConfig(property_store="file", cache="memcached", cache_ttl="soon")

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()
        errors = exc_info.value.errors
        assert any("cache must be one of" in e for e in errors)
        assert "file_path is required for the file property store" in errors
        assert any("Invalid cache_ttl" in e for e in errors)

    def test_validate_rejects_non_positive_ttl(self):
        with pytest.raises(ConfigurationError):
            StorageConfig(cache_ttl=0).validate()


class TestFactory:
    """Test tier creation from configuration"""

    def test_create_memory_tiers(self):
        config = StorageConfig(property_store="memory", cache="memory")

        assert isinstance(create_property_store(config), MemoryPropertyStore)
        assert isinstance(create_cache(config), MemorySharedCache)

    def test_create_none_tiers(self):
        config = StorageConfig(property_store="none", cache="none")

        assert create_property_store(config) is None
        assert create_cache(config) is None

    def test_create_file_store(self, tmp_path):
        config = StorageConfig(property_store="file", file_path=str(tmp_path / "p.json"))

        store = create_property_store(config)
        assert isinstance(store, FilePropertyStore)
        assert store.file_path == tmp_path / "p.json"

    def test_create_redis_cache(self, monkeypatch):
        monkeypatch.setattr(redis.Redis, "from_url", MagicMock())
        config = StorageConfig(cache="redis", cache_key_prefix="app:")

        cache = create_cache(config)
        assert isinstance(cache, RedisSharedCache)
        assert cache.key_prefix == "app:"

    def test_invalid_config_is_rejected(self):
        with pytest.raises(ConfigurationError):
            create_property_store(StorageConfig(property_store="file"))

    def test_register_custom_types(self):
        register_property_store("Custom", lambda config: MemoryPropertyStore({"k": "1"}))
        register_cache("custom", lambda config: MemorySharedCache())

        types = get_available_types()
        assert "custom" in types["property_store"]
        assert "custom" in types["cache"]
        store = create_property_store(StorageConfig(property_store="custom"))
        assert store.get("k") == "1"

"""Tests for configuration loading and the config context."""

import os
import textwrap
from unittest.mock import patch

import pytest

from src.library_api.runtime.config.config_data import (
    ConfigData,
    RedisConfig,
    StorageConfig,
)
from src.library_api.runtime.config.config_template import (
    load_templated_yaml,
    substitute_env_vars,
)
from src.library_api.runtime.context import get_config, with_context
from src.library_api.runtime.settings import EnvironmentVariables


class TestSubstituteEnvVars:
    def test_default_used_when_unset(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${STORAGE_BACKEND:-static}") == "static"

    def test_value_wins_over_default(self):
        with patch.dict(os.environ, {"STORAGE_BACKEND": "redis"}):
            assert substitute_env_vars("${STORAGE_BACKEND:-static}") == "redis"

    def test_required_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="REDIS_URL not set"):
                substitute_env_vars("${REDIS_URL}")

    def test_custom_error(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="REDIS_URL: needed for redis"):
                substitute_env_vars("${REDIS_URL:?needed for redis}")


class TestLoadTemplatedYaml:
    def _write(self, tmp_path, text):
        path = tmp_path / "config.yaml"
        path.write_text(textwrap.dedent(text))
        return path

    def test_loads_sections(self, tmp_path):
        path = self._write(
            tmp_path,
            """
            config:
              storage:
                backend: ${STORAGE_BACKEND:-static}
                key_prefix: books
              redis:
                url: redis://db:6379/1
              logging:
                level: DEBUG
                format: plain
            """,
        )
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(path)

        assert config.storage.backend == "static"
        assert config.storage.key_prefix == "books"
        assert config.redis.url == "redis://db:6379/1"
        assert config.logging.format == "plain"
        assert config.app.port == 8000

    def test_environment_prefixed_override(self, tmp_path):
        path = self._write(
            tmp_path,
            """
            config:
              storage:
                backend: ${STORAGE_BACKEND:-static}
            """,
        )
        with patch.dict(os.environ, {"PRODUCTION_STORAGE_BACKEND": "redis"}, clear=True):
            config = load_templated_yaml(path, env_mode="production")

        assert config.storage.backend == "redis"

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_templated_yaml(tmp_path / "absent.yaml")

        assert config == ConfigData()

    def test_invalid_backend(self, tmp_path):
        path = self._write(
            tmp_path,
            """
            config:
              storage:
                backend: dynamo
            """,
        )

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path)

    def test_empty_file(self, tmp_path):
        path = self._write(tmp_path, "")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(path)


class TestRedisConfig:
    def test_password_injected(self):
        config = RedisConfig(url="redis://db:6379/0", password="s3cret")

        assert config.connection_string == "redis://:s3cret@db:6379/0"
        assert config.sanitized_connection_string == "redis://***@db:6379/0"

    def test_no_password(self):
        config = RedisConfig(url="redis://db:6379/0")

        assert config.sanitized_connection_string == "redis://db:6379/0"


class TestContext:
    def test_with_context_restores(self):
        before = get_config()
        override = ConfigData(storage=StorageConfig(backend="redis"))

        with with_context(override):
            assert get_config().storage.backend == "redis"

        assert get_config() is before

    def test_with_context_none(self):
        before = get_config()

        with with_context(None):
            assert get_config() is before

    def test_with_context_rejects_other_types(self):
        with pytest.raises(ValueError, match="must be ConfigData"):
            with with_context({"storage": {"backend": "redis"}}):
                pass


class TestEnvironmentVariables:
    def test_reads_aliases(self):
        env = {"APP_ENVIRONMENT": "production", "LIBRARY_API_CONFIG": "/etc/library.yaml"}
        with patch.dict(os.environ, env, clear=True):
            settings = EnvironmentVariables(_env_file=None)

        assert settings.environment == "production"
        assert settings.config_file == "/etc/library.yaml"

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = EnvironmentVariables(_env_file=None)

        assert settings.environment == "development"
        assert settings.config_file == "config.yaml"

"""
Tests for configuration loading
"""

import pytest

from ..config_loader import (
    AuthConfig,
    _substitute_env_vars,
    load_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host environment out of config tests"""
    for name in (
        "CONFIG_PATH",
        "MAP_SERVICE_HOST",
        "MAP_SERVICE_PORT",
        "MAP_QUERY_TIMEOUT_SECONDS",
        "MAP_API_ENABLED",
        "MAP_API_READ_KEY",
        "MAP_API_READ_WRITE_KEY",
        "MAP_API_HEADER_NAME",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestSubstituteEnvVars:
    """Tests for ${VAR:-default} substitution"""

    def test_default_used_when_unset(self):
        assert _substitute_env_vars("${MAP_TEST_UNSET:-fallback}") == "fallback"

    def test_env_value_wins(self, monkeypatch):
        monkeypatch.setenv("MAP_TEST_VALUE", "from-env")

        assert _substitute_env_vars("${MAP_TEST_VALUE:-fallback}") == "from-env"

    def test_missing_without_default(self):
        assert _substitute_env_vars("x${MAP_TEST_UNSET}y") == "xy"

    def test_nested_structures(self, monkeypatch):
        monkeypatch.setenv("MAP_TEST_PORT", "9000")

        result = _substitute_env_vars({
            "server": {"port": "${MAP_TEST_PORT:-8080}"},
            "hosts": ["${MAP_TEST_UNSET:-a}", "b"],
            "enabled": True,
        })

        assert result == {
            "server": {"port": "9000"},
            "hosts": ["a", "b"],
            "enabled": True,
        }


class TestLoadConfig:
    """Tests for load_config"""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "missing.yaml"))

        assert config.service.name == "map_service"
        assert config.server.port == 8080
        assert config.server.route_prefix == "/api/Map"
        assert config.engine.route_separator == ""
        assert config.auth.enabled is True
        assert config.auth.read_key is None

    def test_shipped_config(self):
        config = load_config()

        assert config.service.name == "map_service"
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 8080
        assert config.engine.query_timeout_seconds == 5.0
        assert config.auth.header_name == "X-Api-Key"
        assert config.observability.log_format == "json"

    def test_config_path_env(self, tmp_path, monkeypatch):
        path = tmp_path / "service.yaml"
        path.write_text("server:\n  port: 9100\n")
        monkeypatch.setenv("CONFIG_PATH", str(path))

        assert load_config().server.port == 9100

    def test_yaml_with_substitution(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text(
            "service:\n"
            "  name: routes\n"
            "server:\n"
            "  port: ${MAP_SERVICE_PORT:-8080}\n"
            "engine:\n"
            "  query_timeout_seconds: 0.5\n"
            "  route_separator: ','\n"
        )
        monkeypatch.setenv("MAP_SERVICE_PORT", "8181")

        config = load_config(str(path))

        assert config.service.name == "routes"
        assert config.server.port == 8181
        assert config.engine.query_timeout_seconds == 0.5
        assert config.engine.route_separator == ","

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(str(path)).server.port == 8080

    def test_api_keys_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("auth:\n  enabled: true\n")
        monkeypatch.setenv("MAP_API_READ_KEY", "reader")
        monkeypatch.setenv("MAP_API_READ_WRITE_KEY", "writer")

        config = load_config(str(path))

        assert config.auth.read_key == "reader"
        assert config.auth.read_write_key == "writer"

    def test_yaml_keys_override_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("auth:\n  read_key: from-yaml\n")
        monkeypatch.setenv("MAP_API_READ_KEY", "from-env")

        assert load_config(str(path)).auth.read_key == "from-yaml"


class TestAuthConfig:
    """Tests for environment-backed auth settings"""

    def test_disable_from_environment(self, monkeypatch):
        monkeypatch.setenv("MAP_API_ENABLED", "false")

        assert AuthConfig().enabled is False

"""
Configuration Loader

Loads service configuration from YAML file with environment variable substitution.
API keys are read from the environment through pydantic-settings.
"""

import os
import re
from typing import Any, Optional
from pathlib import Path

import yaml
import structlog
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")


def _substitute_env_vars(value: Any) -> Any:
    """
    Recursively substitute environment variables in configuration.

    Supports format: ${VAR_NAME:-default_value}
    """
    if isinstance(value, str):
        # Pattern: ${VAR:-default} or ${VAR}
        pattern = r"\$\{([^}:]+)(?::-([^}]*))?\}"

        def replace(match):
            var_name = match.group(1)
            default = match.group(2) if match.group(2) is not None else ""
            return os.getenv(var_name, default)

        return re.sub(pattern, replace, value)

    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]

    return value


class ServiceConfig(BaseModel):
    """Service identification configuration"""
    name: str = "map_service"
    version: str = "1.0.0"
    description: str = "Shortest path API over an in-memory map"


class ServerConfig(BaseModel):
    """HTTP server configuration"""
    host: str = "0.0.0.0"
    port: int = 8080
    route_prefix: str = "/api/Map"


class EngineConfig(BaseModel):
    """Path engine configuration"""
    query_timeout_seconds: float = 5.0
    route_separator: str = ""


class AuthConfig(BaseSettings):
    """
    API key configuration.

    Keys come from MAP_API_READ_KEY and MAP_API_READ_WRITE_KEY unless
    given explicitly.
    """
    model_config = SettingsConfigDict(env_prefix="MAP_API_")

    enabled: bool = True
    header_name: str = "X-Api-Key"
    read_key: Optional[str] = None
    read_write_key: Optional[str] = None


class ObservabilityConfig(BaseModel):
    """Observability configuration"""
    log_level: str = "INFO"
    log_format: str = "json"


class Config(BaseModel):
    """Complete service configuration"""
    service: ServiceConfig = Field(default_factory=lambda: ServiceConfig())
    server: ServerConfig = Field(default_factory=lambda: ServerConfig())
    engine: EngineConfig = Field(default_factory=lambda: EngineConfig())
    auth: AuthConfig = Field(default_factory=lambda: AuthConfig())
    observability: ObservabilityConfig = Field(default_factory=lambda: ObservabilityConfig())


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses CONFIG_PATH or the
            config.yaml shipped next to this module.

    Returns:
        Parsed Config object
    """
    if config_path is None:
        config_path = os.getenv("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)
    if not path.exists():
        logger.warning(
            "Config file not found, using defaults",
            path=str(path),
        )
        return Config()

    logger.info("Loading configuration", path=str(path))

    with open(path, "r") as f:
        raw_config = yaml.safe_load(f) or {}

    # Substitute environment variables
    config_data = _substitute_env_vars(raw_config)

    # Built directly so that unset keys still fall back to the environment
    auth = AuthConfig(**(config_data.pop("auth", None) or {}))

    config = Config(auth=auth, **config_data)

    logger.info(
        "Configuration loaded",
        service_name=config.service.name,
        service_version=config.service.version,
        auth_enabled=config.auth.enabled,
    )

    return config

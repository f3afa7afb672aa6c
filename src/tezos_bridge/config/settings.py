"""Application settings loaded from environment variables and config files.

Configuration is loaded from (highest priority first):
1. Environment variables (prefix: ``TEZOS_BRIDGE_``, nested via ``__``)
2. YAML config file (``config_path`` or ``TEZOS_BRIDGE_CONFIG_PATH`` env var)
3. Defaults defined here
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Sub-config models
# ---------------------------------------------------------------------------


class ServerConfig(BaseSettings):
    """HTTP server settings."""

    model_config = SettingsConfigDict(
        env_prefix="TEZOS_BRIDGE_SERVER__",
        case_sensitive=False,
    )

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3004


class EngineConfig(BaseSettings):
    """Chain-engine daemon settings."""

    model_config = SettingsConfigDict(
        env_prefix="TEZOS_BRIDGE_ENGINE__",
        case_sensitive=False,
    )

    url: str = "http://localhost:8765"
    token: str = ""
    timeout: float = 30.0
    disable_broadcast: bool = Field(
        default=False,
        description="Sign but never submit; the operation hash is left empty",
    )


class CacheConfig(BaseSettings):
    """Memoization cache settings."""

    model_config = SettingsConfigDict(
        env_prefix="TEZOS_BRIDGE_CACHE__",
        case_sensitive=False,
    )

    max_size: int = Field(default=100, ge=1, description="LRU capacity per cached function")
    ttl_seconds: int | None = Field(
        default=300,
        description="Freshness window of a resolved entry; None disables expiry",
    )


class MetricsConfig(BaseSettings):
    """Prometheus metrics settings."""

    model_config = SettingsConfigDict(
        env_prefix="TEZOS_BRIDGE_METRICS__",
        case_sensitive=False,
    )

    enabled: bool = True


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file and return its contents as a dict.

    Returns an empty dict if the file doesn't exist or is empty.
    """
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return data if isinstance(data, dict) else {}


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Loads settings from environment variables (``TEZOS_BRIDGE_`` prefix),
    an optional YAML file, and built-in defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="TEZOS_BRIDGE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    debug: bool = False
    version: str = "0.1.0"
    config_path: str = ""

    server: ServerConfig = Field(default_factory=ServerConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)

    @model_validator(mode="before")
    @classmethod
    def _merge_yaml(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Merge YAML config file contents under the env var overrides."""
        config_path = values.get("config_path", "")
        if not config_path:
            return values
        yaml_data = _load_yaml(config_path)
        # YAML values serve as defaults; env vars (already in *values*) win.
        for key, val in yaml_data.items():
            if key not in values or values[key] is None:
                values[key] = val
            elif isinstance(val, dict) and isinstance(values.get(key), dict):
                values[key] = {**val, **values[key]}
        return values

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Construct ``AppConfig`` loading defaults from a YAML file.

        Environment variables still override YAML values.
        """
        return cls(config_path=str(path))

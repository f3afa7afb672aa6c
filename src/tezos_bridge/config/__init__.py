"""Configuration — pydantic-settings models loaded from env and YAML."""

from tezos_bridge.config.settings import (
    AppConfig,
    CacheConfig,
    EngineConfig,
    MetricsConfig,
    ServerConfig,
)

__all__ = ["AppConfig", "CacheConfig", "EngineConfig", "MetricsConfig", "ServerConfig"]

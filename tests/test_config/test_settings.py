"""Tests for the configuration system."""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from tezos_bridge.config.settings import (
    AppConfig,
    CacheConfig,
    EngineConfig,
    MetricsConfig,
    ServerConfig,
    _load_yaml,
)

if TYPE_CHECKING:
    from pathlib import Path

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    """Verify all default values are correct."""

    def test_server_defaults(self) -> None:
        cfg = ServerConfig()
        assert cfg.host == "0.0.0.0"  # noqa: S104
        assert cfg.port == 3004

    def test_engine_defaults(self) -> None:
        cfg = EngineConfig()
        assert cfg.url == "http://localhost:8765"
        assert cfg.token == ""
        assert cfg.timeout == 30.0
        assert cfg.disable_broadcast is False

    def test_cache_defaults(self) -> None:
        cfg = CacheConfig()
        assert cfg.max_size == 100
        assert cfg.ttl_seconds == 300

    def test_metrics_defaults(self) -> None:
        assert MetricsConfig().enabled is True

    def test_app_defaults(self) -> None:
        cfg = AppConfig()
        assert cfg.debug is False
        assert cfg.version == "0.1.0"
        assert isinstance(cfg.engine, EngineConfig)
        assert isinstance(cfg.cache, CacheConfig)


# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------


class TestEnvOverrides:
    def test_engine_url_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEZOS_BRIDGE_ENGINE__URL", "http://engine:9000")
        assert AppConfig().engine.url == "http://engine:9000"

    def test_disable_broadcast_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEZOS_BRIDGE_ENGINE__DISABLE_BROADCAST", "true")
        assert AppConfig().engine.disable_broadcast is True

    def test_cache_size_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEZOS_BRIDGE_CACHE__MAX_SIZE", "7")
        assert AppConfig().cache.max_size == 7

    def test_debug_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEZOS_BRIDGE_DEBUG", "1")
        assert AppConfig().debug is True

    def test_cache_size_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            CacheConfig(max_size=0)


# ---------------------------------------------------------------------------
# YAML
# ---------------------------------------------------------------------------


class TestYaml:
    def test_load_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nope.yaml") == {}

    def test_load_non_mapping(self, tmp_path: Path) -> None:
        p = tmp_path / "list.yaml"
        p.write_text("- a\n- b\n", encoding="utf-8")
        assert _load_yaml(p) == {}

    def test_from_yaml(self, tmp_path: Path) -> None:
        p = tmp_path / "config.yaml"
        p.write_text(
            textwrap.dedent(
                """\
                debug: true
                engine:
                  url: http://yaml-engine:1234
                  disable_broadcast: true
                cache:
                  max_size: 12
                """
            ),
            encoding="utf-8",
        )
        cfg = AppConfig.from_yaml(p)
        assert cfg.debug is True
        assert cfg.engine.url == "http://yaml-engine:1234"
        assert cfg.engine.disable_broadcast is True
        assert cfg.cache.max_size == 12

    def test_env_wins_over_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        p = tmp_path / "config.yaml"
        p.write_text("engine:\n  url: http://yaml-engine:1234\n", encoding="utf-8")
        monkeypatch.setenv("TEZOS_BRIDGE_ENGINE__URL", "http://env-engine:1")
        cfg = AppConfig.from_yaml(p)
        assert cfg.engine.url == "http://env-engine:1"

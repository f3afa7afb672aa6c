"""Application entry point for the Tezos bridge server."""

from __future__ import annotations

import os

import uvicorn

from tezos_bridge.config.settings import AppConfig


def main() -> None:
    """Start the bridge server."""
    config = AppConfig()
    reload = os.getenv("TEZOS_BRIDGE_RELOAD", "false").lower() in ("1", "true", "yes")
    uvicorn.run(
        "tezos_bridge.api.app:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        reload=reload,
        log_level="debug" if config.debug else "info",
    )


if __name__ == "__main__":
    main()

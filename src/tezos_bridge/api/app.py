"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest
from starlette.responses import Response

from tezos_bridge import __version__
from tezos_bridge.api.middleware.cors import setup_cors
from tezos_bridge.api.v1 import v1_router
from tezos_bridge.bridge.account_bridge import TezosAccountBridge
from tezos_bridge.config.settings import AppConfig
from tezos_bridge.engine.client import EngineClient
from tezos_bridge.errors.bridge_errors import BridgeError
from tezos_bridge.metrics.collector import BridgeMetrics
from tezos_bridge.metrics.middleware import PrometheusMiddleware

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from tezos_bridge.engine.protocol import ChainEngine

logger = logging.getLogger(__name__)


def _lifespan(engine: ChainEngine | None):  # noqa: ANN202
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Startup / shutdown lifecycle hooks.

        Connects the engine client (unless one was injected) and builds the
        bridge on startup; closes the client on exit.
        """
        config: AppConfig = app.state.config
        owned: EngineClient | None = None
        chain = engine
        if chain is None:
            owned = EngineClient(config.engine)
            await owned.connect()
            chain = owned

        app.state.bridge = TezosAccountBridge(
            chain,
            cache_config=config.cache,
            engine_config=config.engine,
            metrics=app.state.metrics,
        )
        logger.info("Tezos bridge initialized (engine=%s)", config.engine.url)
        try:
            yield
        finally:
            if owned is not None:
                await owned.close()
            logger.info("Tezos bridge shut down")

    return lifespan


def create_app(
    *,
    config: AppConfig | None = None,
    engine: ChainEngine | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        config: Optional AppConfig. If *None*, a default config is created
            from environment variables.
        engine: Optional chain engine to use instead of an :class:`EngineClient`.
    """
    if config is None:
        config = AppConfig()

    app = FastAPI(
        title="py-tezos-bridge",
        version=__version__,
        description="Transaction preparation and status for Tezos accounts",
        lifespan=_lifespan(engine),
    )

    app.state.config = config
    app.state.metrics = BridgeMetrics() if config.metrics.enabled else None

    # -- Middleware --
    setup_cors(app)
    if app.state.metrics is not None:
        app.add_middleware(PrometheusMiddleware, registry=app.state.metrics.registry)

    # -- Error handler --
    @app.exception_handler(BridgeError)
    async def _bridge_error_handler(request: Request, exc: BridgeError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    # -- Base routes --
    @app.get("/health", tags=["base"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/capabilities", tags=["base"])
    async def capabilities() -> dict[str, bool]:
        return TezosAccountBridge.get_capabilities()

    @app.get("/metrics", tags=["base"], include_in_schema=False)
    async def metrics_endpoint() -> Response:
        """Prometheus metrics endpoint."""
        metrics = app.state.metrics
        body = generate_latest(metrics.registry) if metrics is not None else b""
        return Response(
            content=body,
            media_type="text/plain; version=0.0.4; charset=utf-8",
        )

    app.include_router(v1_router)

    return app

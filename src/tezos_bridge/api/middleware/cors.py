"""CORS middleware configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi.middleware.cors import CORSMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI


def setup_cors(app: FastAPI) -> None:
    """Add CORS middleware so browser wallets can call the bridge.

    Requests carry no credentials, so any origin may call the GET and POST routes.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

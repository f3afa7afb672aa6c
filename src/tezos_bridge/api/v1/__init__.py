"""V1 REST API routes.

Combines all sub-routers under the ``/api/v1`` prefix.
"""

from fastapi import APIRouter

from tezos_bridge.api.v1.transactions import router as transactions_router

v1_router = APIRouter(prefix="/api/v1")

v1_router.include_router(transactions_router)

__all__ = ["v1_router"]

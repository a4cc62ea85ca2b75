"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from infinito_catalog.api.collections import router as collections_router
from infinito_catalog.api.health import router as health_router
from infinito_catalog.api.heartbeat import router as heartbeat_router

__all__ = [
    "collections_router",
    "health_router",
    "heartbeat_router",
]

"""Shared API dependencies.

Process-wide singletons exposed as FastAPI dependencies so tests can
replace them through `app.dependency_overrides`.
"""

from infinito_catalog.catalog.models import OrganizedCategories
from infinito_catalog.catalog.service import CatalogService
from infinito_catalog.desktop.watchdog import HeartbeatWatchdog
from infinito_catalog.infrastructure.cache import TTLCache
from infinito_catalog.infrastructure.config import settings
from infinito_catalog.infrastructure.store_client import StorefrontClient
from infinito_catalog.rendering.renderer import CatalogRenderer

_catalog_service: CatalogService | None = None
_catalog_renderer: CatalogRenderer | None = None
_watchdog: HeartbeatWatchdog | None = None


def get_catalog_service() -> CatalogService:
    """Get the catalog service singleton.

    Returns:
        CatalogService instance with a 15-minute listing cache.
    """
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService(
            client=StorefrontClient(),
            cache=TTLCache[OrganizedCategories](default_ttl=settings.cache_ttl_seconds),
        )
    return _catalog_service


async def close_catalog_service() -> None:
    """Close the catalog service HTTP client, if created."""
    global _catalog_service
    if _catalog_service is not None:
        await _catalog_service.client.close()
        _catalog_service = None


def get_catalog_renderer() -> CatalogRenderer:
    """Get the catalog renderer singleton."""
    global _catalog_renderer
    if _catalog_renderer is None:
        _catalog_renderer = CatalogRenderer()
    return _catalog_renderer


def set_watchdog(watchdog: HeartbeatWatchdog | None) -> None:
    """Install the heartbeat watchdog (done by the desktop launcher)."""
    global _watchdog
    _watchdog = watchdog


def get_watchdog() -> HeartbeatWatchdog | None:
    """Get the heartbeat watchdog, or None when not running as desktop app."""
    return _watchdog

"""Shared fixtures for API tests."""

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from infinito_catalog.api.dependencies import (
    get_catalog_renderer,
    get_catalog_service,
    get_watchdog,
)
from infinito_catalog.catalog.service import CatalogService
from infinito_catalog.main import app
from infinito_catalog.rendering.renderer import CatalogRenderer


@pytest.fixture
def catalog_service() -> MagicMock:
    """Create a mock catalog service."""
    service = MagicMock(spec=CatalogService)
    service.list_categorized_collections = AsyncMock(return_value={})
    service.fetch_catalog_products = AsyncMock(return_value=[])
    service.lookup_collection_info = AsyncMock(return_value=None)
    return service


@pytest.fixture
def catalog_renderer() -> MagicMock:
    """Create a mock renderer that returns a fixed PDF."""
    renderer = MagicMock(spec=CatalogRenderer)
    renderer.render = AsyncMock(return_value=b"%PDF-1.7 test")
    return renderer


@pytest.fixture
def client(catalog_service: MagicMock, catalog_renderer: MagicMock) -> Iterator[TestClient]:
    """Create test client with mocked dependencies."""
    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    app.dependency_overrides[get_catalog_renderer] = lambda: catalog_renderer
    app.dependency_overrides[get_watchdog] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()

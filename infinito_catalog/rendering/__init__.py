"""Catalog rendering (HTML template and PDF printing)."""

from infinito_catalog.rendering.renderer import CatalogRenderer, paginate

__all__ = ["CatalogRenderer", "paginate"]

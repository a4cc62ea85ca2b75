"""Domain layer module.

Contains the catalog error hierarchy.
"""

from infinito_catalog.domain.exceptions import (
    CatalogError,
    EmptyCollectionError,
    NetworkError,
    RemoteFetchError,
    RenderError,
)

__all__ = [
    "CatalogError",
    "EmptyCollectionError",
    "NetworkError",
    "RemoteFetchError",
    "RenderError",
]

"""Product Catalog.

Collection taxonomy, product normalization, collection organization and
the catalog service built on top of them.
"""

from infinito_catalog.catalog.models import (
    CategoryBucket,
    CollectionSummary,
    NormalizedProduct,
    OrganizedCategories,
)
from infinito_catalog.catalog.normalizer import format_price, normalize_product, normalize_products
from infinito_catalog.catalog.organizer import organize
from infinito_catalog.catalog.service import CatalogService
from infinito_catalog.catalog.taxonomy import (
    CATEGORIES,
    Category,
    all_collection_handles,
    categories_of,
    display_name_for,
)

__all__ = [
    # Taxonomy
    "CATEGORIES",
    "Category",
    "all_collection_handles",
    "categories_of",
    "display_name_for",
    # Models
    "CategoryBucket",
    "CollectionSummary",
    "NormalizedProduct",
    "OrganizedCategories",
    # Normalizer
    "format_price",
    "normalize_product",
    "normalize_products",
    # Organizer
    "organize",
    # Service
    "CatalogService",
]

"""Catalog service.

High-level operations used by the HTTP layer: the categorized collection
listing, normalized products for a catalog, and collection lookup.
"""

import asyncio
from typing import TYPE_CHECKING

import structlog

from infinito_catalog.catalog.models import (
    CollectionSummary,
    NormalizedProduct,
    OrganizedCategories,
)
from infinito_catalog.catalog.normalizer import normalize_products
from infinito_catalog.catalog.organizer import organize
from infinito_catalog.catalog.taxonomy import (
    CATEGORIES,
    Category,
    all_collection_handles,
    display_name_for,
)
from infinito_catalog.domain.exceptions import (
    CatalogError,
    EmptyCollectionError,
    NetworkError,
    RemoteFetchError,
)
from infinito_catalog.infrastructure.cache import TTLCache

if TYPE_CHECKING:
    from infinito_catalog.infrastructure.store_client import StorefrontClient

logger = structlog.get_logger()


class CatalogService:
    """Catalog operations over a storefront client.

    Example usage:
        async with StorefrontClient() as client:
            service = CatalogService(client, TTLCache(default_ttl=900))
            categories = await service.list_categorized_collections()
    """

    def __init__(
        self,
        client: "StorefrontClient",
        cache: TTLCache[OrganizedCategories] | None = None,
        categories: tuple[Category, ...] = CATEGORIES,
    ) -> None:
        """Initialize service.

        Args:
            client: Storefront client.
            cache: Cache for the categorized listing (no caching if None).
            categories: Category table.
        """
        self.client = client
        self.cache = cache
        self.categories = categories

    async def _summarize(self, handle: str) -> CollectionSummary | None:
        """Count the products of one collection.

        Failures are logged and reported as None so one broken collection
        does not block the listing.
        """
        try:
            products = await self.client.fetch_all_products_in_collection(handle)
        except (NetworkError, RemoteFetchError) as e:
            logger.warning(
                "Skipping collection",
                handle=handle,
                error=e.message,
            )
            return None

        if not products:
            return None

        return CollectionSummary(
            handle=handle,
            title=display_name_for(handle, handle),
            product_count=len(products),
        )

    async def list_categorized_collections(
        self, bypass_cache: bool = False
    ) -> OrganizedCategories:
        """List declared collections organized by category.

        Every declared collection is fetched concurrently; collections that
        fail or are empty are left out.

        Args:
            bypass_cache: Ignore (and refresh) the cached listing.

        Returns:
            Organized categories.
        """
        if self.cache is not None and not bypass_cache:
            cached = self.cache.get()
            if cached is not None:
                logger.debug("Serving categorized collections from cache")
                return cached

        handles = all_collection_handles(self.categories)
        results = await asyncio.gather(*(self._summarize(h) for h in handles))
        summaries = [s for s in results if s is not None]

        organized = organize(summaries, self.categories)
        logger.info(
            "Collections organized",
            requested=len(handles),
            found=len(summaries),
            categories=list(organized),
        )

        if self.cache is not None:
            self.cache.put(organized)
        return organized

    async def fetch_catalog_products(self, handle: str) -> list[NormalizedProduct]:
        """Get normalized products for a collection catalog.

        Args:
            handle: Collection handle.

        Returns:
            Normalized products.

        Raises:
            EmptyCollectionError: If the collection has no products.
            RemoteFetchError: If the storefront rejects the request
                (404 when the handle does not exist).
            NetworkError: On transport failure.
        """
        logger.info("Fetching catalog products", handle=handle)
        raw = await self.client.fetch_all_products_in_collection(handle)
        products = normalize_products(raw)

        if not products:
            raise EmptyCollectionError(handle)

        available = sum(1 for p in products if p.disponible)
        logger.info(
            "Products normalized",
            handle=handle,
            total=len(products),
            available=available,
            sold_out=len(products) - available,
        )
        return products

    async def lookup_collection_info(self, handle: str) -> CollectionSummary | None:
        """Find a collection in the store listing.

        Args:
            handle: Collection handle.

        Returns:
            CollectionSummary if found, None if missing or the listing failed.
        """
        try:
            collections = await self.client.fetch_collections()
        except CatalogError as e:
            logger.warning("Collection lookup failed", handle=handle, error=e.message)
            return None

        for collection in collections:
            if collection.handle == handle:
                return collection
        return None

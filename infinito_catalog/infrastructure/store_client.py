"""Storefront HTTP client.

Reads collections and products from the public Shopify JSON endpoints of
the store (`/collections.json` and `/collections/{handle}/products.json`).
"""

from collections.abc import Callable, Hashable
from typing import Any

import httpx
import structlog

from infinito_catalog.catalog.models import CollectionSummary
from infinito_catalog.domain.exceptions import NetworkError, RemoteFetchError
from infinito_catalog.infrastructure.config import settings

logger = structlog.get_logger()


DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/121.0.0.0 Safari/537.36"
    ),
    "Accept": "application/json",
}


class StorefrontClient:
    """HTTP client for the storefront's public JSON API.

    Pages are followed through the `Link: <...>; rel="next"` response header.
    Full pages without that header fall back to the next page number when
    `page_number_fallback` is set. Results are deduplicated by ID, so an
    item that shifts across a page boundary between requests is kept once.
    """

    def __init__(
        self,
        base_url: str | None = None,
        page_size: int | None = None,
        max_pages: int | None = None,
        page_number_fallback: bool | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize storefront client.

        Args:
            base_url: Store base URL (defaults to settings).
            page_size: Items requested per page.
            max_pages: Upper bound on requests per listing.
            page_number_fallback: Request the next page number when a full
                page carries no `Link` header.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = (base_url or settings.store_base_url).rstrip("/")
        self.page_size = page_size or settings.page_size
        self.max_pages = max_pages or settings.max_pages
        self.page_number_fallback = (
            settings.page_number_fallback
            if page_number_fallback is None
            else page_number_fallback
        )
        self.timeout = timeout or settings.request_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=DEFAULT_HEADERS,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "StorefrontClient":
        """Context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Context manager exit."""
        await self.close()

    async def _get_json(
        self, url: str, params: dict[str, Any] | None = None
    ) -> tuple[httpx.Response, dict[str, Any]]:
        """GET a URL and decode its JSON body.

        Raises:
            NetworkError: On transport failure.
            RemoteFetchError: On non-success status or a non-JSON body.
        """
        try:
            client = await self._get_client()
            response = await client.get(url, params=params)
        except httpx.RequestError as e:
            logger.error("Storefront request failed", url=url, error=str(e))
            raise NetworkError(url, str(e)) from e

        if response.status_code != 200:
            raise RemoteFetchError(str(response.url), response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteFetchError(
                str(response.url), response.status_code, "response is not JSON"
            ) from e

        if not isinstance(data, dict):
            raise RemoteFetchError(
                str(response.url), response.status_code, "unexpected payload shape"
            )
        return response, data

    async def _collect(
        self,
        path: str,
        key: str,
        identity: Callable[[dict[str, Any]], Hashable],
    ) -> list[dict[str, Any]]:
        """Fetch every page of a listing endpoint.

        Args:
            path: Listing path, e.g. "/collections/nariz/products.json".
            key: Payload key holding the page items.
            identity: Deduplication key for an item.

        Returns:
            Unique items in first-seen order.

        Raises:
            RemoteFetchError: If the page items are not a list of objects.
        """
        items: dict[Hashable, dict[str, Any]] = {}
        visited: set[str] = set()
        url = path
        params: dict[str, Any] | None = {"limit": self.page_size, "page": 1}
        page_number = 1
        follow_links = False

        for _ in range(self.max_pages):
            logger.debug("Fetching page", url=url, params=params)
            response, data = await self._get_json(url, params)
            visited.add(str(response.url))

            batch = data.get(key) or []
            if not isinstance(batch, list) or not all(isinstance(i, dict) for i in batch):
                raise RemoteFetchError(
                    str(response.url), response.status_code, "unexpected payload shape"
                )
            if not batch:
                break

            seen_before = len(items)
            for item in batch:
                item_key = identity(item)
                if item_key is None:
                    item_key = ("anonymous", len(items))
                items.setdefault(item_key, item)

            if len(batch) < self.page_size:
                break

            # A full page with nothing new means the store ignores paging
            if len(items) == seen_before:
                logger.warning("Page repeated, stopping", path=path, url=str(response.url))
                break

            next_url = response.links.get("next", {}).get("url")
            if next_url:
                if next_url in visited:
                    logger.warning("Pagination loop detected", url=next_url)
                    break
                url, params = next_url, None
                follow_links = True
            elif self.page_number_fallback and not follow_links:
                page_number += 1
                url = path
                params = {"limit": self.page_size, "page": page_number}
            else:
                break
        else:
            logger.warning(
                "Page limit reached", path=path, max_pages=self.max_pages
            )

        return list(items.values())

    async def fetch_collections(self) -> list[CollectionSummary]:
        """List all collections of the store.

        Returns:
            Collection summaries as reported by the storefront.

        Raises:
            NetworkError: On transport failure.
            RemoteFetchError: On non-success status.
        """
        raw = await self._collect(
            "/collections.json",
            "collections",
            identity=lambda c: c.get("handle"),
        )
        return [CollectionSummary.from_api_response(c) for c in raw if c.get("handle")]

    async def fetch_all_products_in_collection(
        self, handle: str
    ) -> list[dict[str, Any]]:
        """Fetch every product of a collection.

        Args:
            handle: Collection handle (e.g. "nariz").

        Returns:
            Raw products, deduplicated by product ID.

        Raises:
            NetworkError: On transport failure.
            RemoteFetchError: On non-success status (404 for an unknown handle).
        """
        products = await self._collect(
            f"/collections/{handle}/products.json",
            "products",
            identity=lambda p: p.get("id", p.get("handle")),
        )
        logger.info("Collection fetched", handle=handle, products=len(products))
        return products

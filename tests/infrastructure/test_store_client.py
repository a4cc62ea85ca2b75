"""Tests for the storefront client."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from infinito_catalog.catalog.models import CollectionSummary
from infinito_catalog.domain.exceptions import NetworkError, RemoteFetchError
from infinito_catalog.infrastructure.store_client import StorefrontClient

BASE_URL = "https://store.test"


def products(*ids: int) -> list[dict[str, Any]]:
    """Create raw products with the given IDs."""
    return [{"id": i, "title": f"Producto {i}", "variants": []} for i in ids]


def next_link(cursor: str) -> dict[str, str]:
    """Build a Link header pointing at the next page."""
    return {
        "Link": f'<{BASE_URL}/collections/nariz/products.json?limit=250&page_info={cursor}>; rel="next"'
    }


class RecordingHandler:
    """MockTransport handler that records requests."""

    def __init__(self, respond: Callable[[httpx.Request, int], httpx.Response]) -> None:
        self.respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request, len(self.requests))


def make_client(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> StorefrontClient:
    """Create a storefront client over a mock transport."""
    return StorefrontClient(
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestFetchAllProductsInCollection:
    """Tests for fetch_all_products_in_collection."""

    @pytest.mark.asyncio
    async def test_pages_of_250_250_37(self) -> None:
        """Three pages are fetched and the short page stops pagination."""
        pages = {
            1: (products(*range(0, 250)), next_link("p2")),
            2: (products(*range(250, 500)), next_link("p3")),
            3: (products(*range(500, 537)), {}),
        }

        def respond(request: httpx.Request, n: int) -> httpx.Response:
            batch, headers = pages[n]
            return httpx.Response(200, json={"products": batch}, headers=headers)

        handler = RecordingHandler(respond)
        async with make_client(handler, page_size=250) as client:
            result = await client.fetch_all_products_in_collection("nariz")

        assert len(result) == 537
        assert len(handler.requests) == 3

    @pytest.mark.asyncio
    async def test_follows_link_header(self) -> None:
        """The next page URL comes from the Link header."""
        def respond(request: httpx.Request, n: int) -> httpx.Response:
            if n == 1:
                return httpx.Response(
                    200, json={"products": products(1, 2)}, headers=next_link("abc")
                )
            return httpx.Response(200, json={"products": products(3)})

        handler = RecordingHandler(respond)
        async with make_client(handler, page_size=2) as client:
            await client.fetch_all_products_in_collection("nariz")

        first, second = handler.requests
        assert first.url.path == "/collections/nariz/products.json"
        assert first.url.params["limit"] == "2"
        assert first.url.params["page"] == "1"
        assert second.url.params["page_info"] == "abc"

    @pytest.mark.asyncio
    async def test_deduplicates_by_id(self) -> None:
        """A product on two pages is kept once."""
        def respond(request: httpx.Request, n: int) -> httpx.Response:
            if n == 1:
                return httpx.Response(
                    200, json={"products": products(5, 7)}, headers=next_link("p2")
                )
            if n == 2:
                return httpx.Response(
                    200, json={"products": products(7, 9)}, headers=next_link("p3")
                )
            return httpx.Response(200, json={"products": []})

        handler = RecordingHandler(respond)
        async with make_client(handler, page_size=2) as client:
            result = await client.fetch_all_products_in_collection("nariz")

        ids = [p["id"] for p in result]
        assert ids.count(7) == 1
        assert ids == [5, 7, 9]

    @pytest.mark.asyncio
    async def test_first_occurrence_wins(self) -> None:
        """The first copy of a duplicated product is kept."""
        def respond(request: httpx.Request, n: int) -> httpx.Response:
            if n == 1:
                return httpx.Response(
                    200,
                    json={"products": [{"id": 7, "title": "first"}, {"id": 8}]},
                    headers=next_link("p2"),
                )
            return httpx.Response(200, json={"products": [{"id": 7, "title": "second"}]})

        async with make_client(RecordingHandler(respond), page_size=2) as client:
            result = await client.fetch_all_products_in_collection("nariz")

        assert result[0]["title"] == "first"

    @pytest.mark.asyncio
    async def test_stops_on_empty_page(self) -> None:
        """An empty first page yields an empty list."""
        handler = RecordingHandler(
            lambda request, n: httpx.Response(200, json={"products": []})
        )
        async with make_client(handler) as client:
            result = await client.fetch_all_products_in_collection("vacia")

        assert result == []
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_stops_without_hint_when_fallback_disabled(self) -> None:
        """A full page without a Link header ends pagination."""
        handler = RecordingHandler(
            lambda request, n: httpx.Response(200, json={"products": products(n * 10, n * 10 + 1)})
        )
        async with make_client(handler, page_size=2, page_number_fallback=False) as client:
            result = await client.fetch_all_products_in_collection("nariz")

        assert len(result) == 2
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_page_number_fallback(self) -> None:
        """Without Link headers, page numbers are requested in turn."""
        sizes = {1: 3, 2: 3, 3: 1}

        def respond(request: httpx.Request, n: int) -> httpx.Response:
            page = int(request.url.params["page"])
            start = (page - 1) * 3
            return httpx.Response(
                200, json={"products": products(*range(start, start + sizes[page]))}
            )

        handler = RecordingHandler(respond)
        async with make_client(handler, page_size=3, page_number_fallback=True) as client:
            result = await client.fetch_all_products_in_collection("nariz")

        assert len(result) == 7
        assert [r.url.params["page"] for r in handler.requests] == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_max_pages_cap(self) -> None:
        """Pagination stops after max_pages requests."""
        def respond(request: httpx.Request, n: int) -> httpx.Response:
            return httpx.Response(
                200, json={"products": products(n * 2, n * 2 + 1)}, headers=next_link(f"p{n + 1}")
            )

        handler = RecordingHandler(respond)
        async with make_client(handler, page_size=2, max_pages=3) as client:
            result = await client.fetch_all_products_in_collection("nariz")

        assert len(handler.requests) == 3
        assert len(result) == 6

    @pytest.mark.asyncio
    async def test_link_loop_detected(self) -> None:
        """A Link header pointing at a visited page stops pagination."""
        def respond(request: httpx.Request, n: int) -> httpx.Response:
            return httpx.Response(
                200,
                json={"products": products(1, 2)},
                headers={"Link": f"<{request.url}>; rel=\"next\""},
            )

        handler = RecordingHandler(respond)
        async with make_client(handler, page_size=2) as client:
            result = await client.fetch_all_products_in_collection("nariz")

        assert len(handler.requests) == 1
        assert len(result) == 2

    @pytest.mark.asyncio
    async def test_unknown_collection_raises(self) -> None:
        """A missing collection is an error, not an empty list."""
        handler = RecordingHandler(lambda request, n: httpx.Response(404, json={"errors": "Not Found"}))
        async with make_client(handler) as client:
            with pytest.raises(RemoteFetchError) as exc_info:
                await client.fetch_all_products_in_collection("no-existe")

        assert exc_info.value.status_code == 404
        assert exc_info.value.is_not_found

    @pytest.mark.asyncio
    async def test_server_error_raises(self) -> None:
        """Non-success statuses raise RemoteFetchError."""
        handler = RecordingHandler(lambda request, n: httpx.Response(503, text="busy"))
        async with make_client(handler) as client:
            with pytest.raises(RemoteFetchError) as exc_info:
                await client.fetch_all_products_in_collection("nariz")

        assert exc_info.value.status_code == 503
        assert not exc_info.value.is_not_found

    @pytest.mark.asyncio
    async def test_error_on_later_page_propagates(self) -> None:
        """A failure mid-pagination is not swallowed."""
        def respond(request: httpx.Request, n: int) -> httpx.Response:
            if n == 1:
                return httpx.Response(
                    200, json={"products": products(1, 2)}, headers=next_link("p2")
                )
            return httpx.Response(429)

        async with make_client(RecordingHandler(respond), page_size=2) as client:
            with pytest.raises(RemoteFetchError):
                await client.fetch_all_products_in_collection("nariz")

    @pytest.mark.asyncio
    async def test_transport_failure_raises_network_error(self) -> None:
        """Transport errors become NetworkError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.fetch_all_products_in_collection("nariz")

        assert "connection refused" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self) -> None:
        """An HTML body (e.g. a bot wall) is rejected."""
        handler = RecordingHandler(
            lambda request, n: httpx.Response(200, text="<html>blocked</html>")
        )
        async with make_client(handler) as client:
            with pytest.raises(RemoteFetchError):
                await client.fetch_all_products_in_collection("nariz")


class TestFetchCollections:
    """Tests for fetch_collections."""

    @pytest.mark.asyncio
    async def test_returns_summaries(self) -> None:
        """Collections are parsed into summaries."""
        payload = {
            "collections": [
                {"handle": "nariz", "title": "Nariz", "products_count": 12, "description": "d"},
                {"handle": "oro", "title": "Oro", "products_count": None},
            ]
        }
        handler = RecordingHandler(lambda request, n: httpx.Response(200, json=payload))
        async with make_client(handler) as client:
            result = await client.fetch_collections()

        assert result == [
            CollectionSummary(handle="nariz", title="Nariz", product_count=12, description="d"),
            CollectionSummary(handle="oro", title="Oro", product_count=0, description=""),
        ]
        assert handler.requests[0].url.path == "/collections.json"

    @pytest.mark.asyncio
    async def test_error_propagates(self) -> None:
        """Listing errors are raised."""
        handler = RecordingHandler(lambda request, n: httpx.Response(500))
        async with make_client(handler) as client:
            with pytest.raises(RemoteFetchError):
                await client.fetch_collections()


class TestClientLifecycle:
    """Tests for client setup and teardown."""

    def test_defaults_from_settings(self) -> None:
        """Unset options come from settings."""
        client = StorefrontClient()
        assert client.base_url == "https://infinitopiercing.com"
        assert client.page_size == 250

    @pytest.mark.asyncio
    async def test_close_resets_client(self) -> None:
        """Closing drops the underlying HTTP client."""
        client = make_client(lambda request: httpx.Response(200, json={"products": []}))
        await client.fetch_all_products_in_collection("nariz")
        assert client._client is not None

        await client.close()
        assert client._client is None


class TestPaginationGuards:
    """Tests for pages that do not advance."""

    @pytest.mark.asyncio
    async def test_repeated_full_page_stops(self) -> None:
        """A store that ignores the page parameter is not polled until max_pages."""
        handler = RecordingHandler(
            lambda request, n: httpx.Response(200, json={"products": products(*range(250))})
        )
        async with make_client(handler, page_size=250, page_number_fallback=True) as client:
            result = await client.fetch_all_products_in_collection("nariz")

        assert len(result) == 250
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_no_page_numbers_after_cursor(self) -> None:
        """Once a Link cursor is followed, a page without a Link header ends pagination."""
        def respond(request: httpx.Request, n: int) -> httpx.Response:
            if n == 1:
                return httpx.Response(
                    200, json={"products": products(1, 2)}, headers=next_link("p2")
                )
            return httpx.Response(200, json={"products": products(3, 4)})

        handler = RecordingHandler(respond)
        async with make_client(handler, page_size=2, page_number_fallback=True) as client:
            result = await client.fetch_all_products_in_collection("nariz")

        assert [p["id"] for p in result] == [1, 2, 3, 4]
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("batch", [[None], [{"id": 1}, "oops"], {"id": 1}])
    async def test_malformed_items_rejected(self, batch: object) -> None:
        """Page items that are not objects raise RemoteFetchError."""
        handler = RecordingHandler(
            lambda request, n: httpx.Response(200, json={"products": batch})
        )
        async with make_client(handler) as client:
            with pytest.raises(RemoteFetchError) as exc_info:
                await client.fetch_all_products_in_collection("oro")

        assert "unexpected payload shape" in exc_info.value.message

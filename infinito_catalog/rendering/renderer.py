"""Catalog renderer.

Turns normalized products into a print-ready HTML document and prints it
to PDF with headless Chromium.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from infinito_catalog.catalog.models import NormalizedProduct
from infinito_catalog.domain.exceptions import RenderError
from infinito_catalog.infrastructure.config import settings

logger = structlog.get_logger()

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

PRODUCTS_PER_PAGE = 4  # 2x2 grid

CHROMIUM_ARGS = ["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"]


def paginate(
    products: Sequence[NormalizedProduct], per_page: int = PRODUCTS_PER_PAGE
) -> list[list[NormalizedProduct]]:
    """Split products into fixed-size pages."""
    return [list(products[i : i + per_page]) for i in range(0, len(products), per_page)]


class CatalogRenderer:
    """Renders collection catalogs.

    Example usage:
        renderer = CatalogRenderer()
        html = renderer.render_html(products, "Nariz")
        pdf = await renderer.render_pdf(html, collection="nariz")
    """

    def __init__(
        self,
        templates_dir: Path = TEMPLATES_DIR,
        store_name: str | None = None,
        store_domain: str | None = None,
        tagline: str | None = None,
        year: int | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            templates_dir: Directory holding `catalog.html`.
            store_name: Brand name printed on every page.
            store_domain: Website printed in the footer.
            tagline: Cover tagline.
            year: Catalog year.
        """
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html"]),
        )
        self.store_name = store_name or settings.store_name
        self.store_domain = store_domain or settings.store_domain
        self.tagline = tagline or settings.store_tagline
        self.year = year or settings.catalog_year

    def build_context(
        self, products: Sequence[NormalizedProduct], collection_name: str
    ) -> dict[str, Any]:
        """Build the template context for a catalog."""
        pages = paginate(products)
        return {
            "collection_name": collection_name.upper(),
            "store_name": self.store_name,
            "store_domain": self.store_domain,
            "tagline": self.tagline,
            "year": self.year,
            "product_count": len(products),
            "per_page": PRODUCTS_PER_PAGE,
            "pages": [[p.to_dict() for p in page] for page in pages],
            "total_pages": len(pages),
        }

    def render_html(
        self, products: Sequence[NormalizedProduct], collection_name: str = "PRODUCTOS"
    ) -> str:
        """Render the catalog HTML.

        Args:
            products: Products to print.
            collection_name: Collection title for the cover and headers.

        Returns:
            Complete HTML document.
        """
        template = self.env.get_template("catalog.html")
        return template.render(**self.build_context(products, collection_name))

    async def render_pdf(self, html: str, collection: str = "") -> bytes:
        """Print HTML to an A4 PDF.

        Args:
            html: Document to print.
            collection: Collection handle (for error context).

        Returns:
            PDF bytes.

        Raises:
            RenderError: If Chromium fails to launch or print.
        """
        logger.info("Generating PDF", collection=collection)
        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(args=CHROMIUM_ARGS)
                try:
                    page = await browser.new_page()
                    await page.set_content(html, wait_until="networkidle")
                    pdf = await page.pdf(
                        format="A4",
                        print_background=True,
                        margin={"top": "0mm", "right": "0mm", "bottom": "0mm", "left": "0mm"},
                    )
                finally:
                    await browser.close()
        except PlaywrightError as e:
            logger.error("PDF generation failed", collection=collection, error=str(e))
            raise RenderError(collection, str(e)) from e

        logger.info("PDF generated", collection=collection, size=len(pdf))
        return pdf

    async def render(
        self, products: Sequence[NormalizedProduct], collection_name: str, collection: str = ""
    ) -> bytes:
        """Render products straight to PDF bytes."""
        html = self.render_html(products, collection_name)
        return await self.render_pdf(html, collection=collection)

"""Product normalizer.

Maps raw storefront products to display-ready records used by the
catalog template and the JSON API.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from infinito_catalog.catalog.models import NormalizedProduct

CURRENCY_SYMBOL = "$"
THOUSANDS_SEPARATOR = "."


def format_price(
    value: Any,
    symbol: str = CURRENCY_SYMBOL,
    thousands_separator: str = THOUSANDS_SEPARATOR,
) -> str:
    """Format a storefront price in Colombian peso conventions.

    Prices are shown in whole pesos, rounded half-up.

    Args:
        value: Price as sent by the storefront (e.g. "25000.00").
        symbol: Currency symbol prefix.
        thousands_separator: Digit group separator.

    Returns:
        Formatted price, e.g. "$25.000". Unparseable input yields "$0".
    """
    try:
        amount = Decimal(str(value).strip())
        if not amount.is_finite():
            return f"{symbol}0"
        units = int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError):
        return f"{symbol}0"

    digits = f"{abs(units):,}".replace(",", thousands_separator)
    sign = "-" if units < 0 else ""
    return f"{sign}{symbol}{digits}"


def choose_variant(product: dict[str, Any]) -> dict[str, Any] | None:
    """Get the first available variant, or the first variant at all."""
    variants = product.get("variants") or []
    for variant in variants:
        if variant.get("available"):
            return variant
    return variants[0] if variants else None


def choose_image(product: dict[str, Any], variant: dict[str, Any] | None) -> str:
    """Get the first product image, else the variant's featured image."""
    images = product.get("images") or []
    if images and images[0].get("src"):
        return images[0]["src"]
    if variant:
        featured = variant.get("featured_image") or {}
        return featured.get("src") or ""
    return ""


def _tags(value: Any) -> tuple[str, ...]:
    # products.json sends a list; the admin-style payload sends "a, b"
    if isinstance(value, str):
        return tuple(t.strip() for t in value.split(",") if t.strip())
    return tuple(value or ())


def normalize_product(product: dict[str, Any]) -> NormalizedProduct:
    """Normalize a single raw product.

    Args:
        product: Raw product from the storefront.

    Returns:
        NormalizedProduct instance.
    """
    variant = choose_variant(product)
    price = variant.get("price") if variant else None

    return NormalizedProduct(
        id=product.get("id"),
        nombre=product.get("title") or "",
        precio=format_price(price if price is not None else "0"),
        imagen=choose_image(product, variant),
        disponible=bool(variant.get("available")) if variant else False,
        handle=product.get("handle") or "",
        descripcion=product.get("body_html") or "",
        variant_count=len(product.get("variants") or []),
        tags=_tags(product.get("tags")),
        tipo=product.get("product_type") or "",
        vendor=product.get("vendor") or "",
    )


def normalize_products(products: Iterable[dict[str, Any]]) -> list[NormalizedProduct]:
    """Normalize raw products, preserving order."""
    return [normalize_product(p) for p in products]

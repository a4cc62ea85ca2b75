"""Catalog data models.

Plain dataclasses for collection summaries, organized category buckets
and display-ready products.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CollectionSummary:
    """A storefront collection with its product count.

    Attributes:
        handle: Collection handle (unique within a fetch cycle).
        title: Display title.
        product_count: Number of products in the collection.
        description: Collection description (may be empty).
    """

    handle: str
    title: str
    product_count: int = 0
    description: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "CollectionSummary":
        """Create from a `/collections.json` entry.

        Args:
            data: API response data.

        Returns:
            CollectionSummary instance.
        """
        return cls(
            handle=data["handle"],
            title=data.get("title") or data["handle"],
            product_count=int(data.get("products_count") or 0),
            description=data.get("description") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the keys the UI expects."""
        return {
            "handle": self.handle,
            "title": self.title,
            "productCount": self.product_count,
            "description": self.description,
        }


@dataclass
class CategoryBucket:
    """Collections grouped under one taxonomy category."""

    display_name: str
    emoji: str
    collections: list[CollectionSummary] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the keys the UI expects."""
        return {
            "nombre": self.display_name,
            "emoji": self.emoji,
            "colecciones": [c.to_dict() for c in self.collections],
        }


OrganizedCategories = dict[str, CategoryBucket]


@dataclass(frozen=True)
class NormalizedProduct:
    """Display-ready product derived from a raw storefront product.

    Attributes:
        id: Storefront product ID.
        nombre: Product title.
        precio: Formatted price of the chosen variant.
        imagen: Image URL, empty when the product has none.
        disponible: Whether the chosen variant is available.
        handle: Product handle.
        descripcion: Product body HTML.
        variant_count: Number of variants.
        tags: Product tags.
        tipo: Product type.
        vendor: Product vendor.
    """

    id: int | str | None
    nombre: str
    precio: str
    imagen: str
    disponible: bool
    handle: str
    descripcion: str = ""
    variant_count: int = 0
    tags: tuple[str, ...] = ()
    tipo: str = ""
    vendor: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the keys the UI and templates expect."""
        return {
            "id": self.id,
            "nombre": self.nombre,
            "precio": self.precio,
            "imagen": self.imagen,
            "disponible": self.disponible,
            "handle": self.handle,
            "descripcion": self.descripcion,
            "variantes": self.variant_count,
            "tags": list(self.tags),
            "tipo": self.tipo,
            "vendor": self.vendor,
        }

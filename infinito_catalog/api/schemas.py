"""API schemas.

Pydantic models for response serialization. Field names follow the
Spanish keys consumed by the bundled UI.
"""

from typing import Any

from pydantic import BaseModel, Field

from infinito_catalog.catalog.models import (
    CategoryBucket,
    CollectionSummary,
    NormalizedProduct,
)


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[Any] | dict[str, Any] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Collection Schemas
# ============================================================================


class CollectionSchema(BaseModel):
    """A collection inside a category."""

    handle: str
    title: str
    productCount: int = Field(..., ge=0, description="Products in the collection")
    description: str = ""

    @classmethod
    def from_summary(cls, summary: CollectionSummary) -> "CollectionSchema":
        """Convert a CollectionSummary."""
        return cls(**summary.to_dict())


class CategorySchema(BaseModel):
    """A category with its collections, largest first."""

    nombre: str
    emoji: str
    colecciones: list[CollectionSchema]

    @classmethod
    def from_bucket(cls, bucket: CategoryBucket) -> "CategorySchema":
        """Convert a CategoryBucket."""
        return cls(
            nombre=bucket.display_name,
            emoji=bucket.emoji,
            colecciones=[CollectionSchema.from_summary(c) for c in bucket.collections],
        )


class CollectionsResponse(BaseModel):
    """Collections organized by category."""

    categorias: dict[str, CategorySchema]


# ============================================================================
# Product Schemas
# ============================================================================


class ProductSchema(BaseModel):
    """Display-ready product."""

    id: int | str | None
    nombre: str
    precio: str
    imagen: str
    disponible: bool
    handle: str
    descripcion: str = ""
    variantes: int = 0
    tags: list[str] = Field(default_factory=list)
    tipo: str = ""
    vendor: str = ""

    @classmethod
    def from_product(cls, product: NormalizedProduct) -> "ProductSchema":
        """Convert a NormalizedProduct."""
        return cls(**product.to_dict())


class CatalogProductsResponse(BaseModel):
    """Products of one collection."""

    coleccion: str
    total: int
    disponibles: int
    agotados: int
    productos: list[ProductSchema]


# ============================================================================
# Heartbeat Schemas
# ============================================================================


class HeartbeatResponse(BaseModel):
    """Heartbeat acknowledgement."""

    status: str = "ok"
    watching: bool = Field(..., description="Whether a watchdog is armed")
    timeout: float | None = Field(default=None, description="Silence window in seconds")
    last_seen: float | None = Field(
        default=None, description="Monotonic timestamp of the recorded heartbeat"
    )

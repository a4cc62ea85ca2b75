"""Catalog endpoints.

Lists collections by category, exposes normalized products, and
generates the downloadable PDF catalog.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Response, status

from infinito_catalog.api.dependencies import get_catalog_renderer, get_catalog_service
from infinito_catalog.api.schemas import (
    CatalogProductsResponse,
    CategorySchema,
    CollectionsResponse,
    ErrorResponse,
    ProductSchema,
)
from infinito_catalog.catalog.service import CatalogService
from infinito_catalog.infrastructure.config import settings
from infinito_catalog.rendering.renderer import CatalogRenderer

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["Catalog"])


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/colecciones",
    response_model=CollectionsResponse,
    status_code=status.HTTP_200_OK,
    summary="List collections by category",
    description="Get every known collection with products, grouped by category.",
)
async def list_collections(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    refresh: bool = Query(default=False, description="Bypass the listing cache"),
) -> CollectionsResponse:
    """List collections organized by category.

    Served from a 15-minute cache unless `refresh` is set.

    Returns:
        Categories with their collections, largest first.
    """
    organized = await service.list_categorized_collections(bypass_cache=refresh)
    return CollectionsResponse(
        categorias={
            key: CategorySchema.from_bucket(bucket) for key, bucket in organized.items()
        }
    )


@router.get(
    "/colecciones/{handle}/productos",
    response_model=CatalogProductsResponse,
    status_code=status.HTTP_200_OK,
    summary="List collection products",
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def list_collection_products(
    handle: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CatalogProductsResponse:
    """Get the normalized products of a collection.

    Args:
        handle: Collection handle.

    Returns:
        Products with availability totals.
    """
    products = await service.fetch_catalog_products(handle)
    available = sum(1 for p in products if p.disponible)
    return CatalogProductsResponse(
        coleccion=handle,
        total=len(products),
        disponibles=available,
        agotados=len(products) - available,
        productos=[ProductSchema.from_product(p) for p in products],
    )


@router.get(
    "/generar-catalogo",
    status_code=status.HTTP_200_OK,
    summary="Generate PDF catalog",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate_catalog(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    renderer: Annotated[CatalogRenderer, Depends(get_catalog_renderer)],
    coleccion: str = Query(
        default=settings.default_collection,
        min_length=1,
        description="Collection handle",
    ),
) -> Response:
    """Generate and download the PDF catalog of a collection.

    Args:
        coleccion: Collection handle.

    Returns:
        PDF attachment.
    """
    logger.info("Starting catalog generation", collection=coleccion)

    products = await service.fetch_catalog_products(coleccion)

    info = await service.lookup_collection_info(coleccion)
    collection_name = info.title if info else coleccion.upper()

    pdf = await renderer.render(products, collection_name, collection=coleccion)

    filename = f"catalogo-infinito-{coleccion}.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )

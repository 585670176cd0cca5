"""
Storefront Catalog Router

Public product browsing: list with search and category filter,
featured products, product detail with related products.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from storefront.errors import ERROR_PRODUCT_NOT_FOUND, ERROR_SERVICE_UNAVAILABLE
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.database import Database
from .deps import get_db
from .serializers import serialize_product

logger = get_logger(__name__)

router = APIRouter(tags=["catalog"])


@router.get("/products")
async def list_products(
    search: Optional[str] = None,
    category: Optional[str] = None,
    db: Database = Depends(get_db),
):
    """Catalog listing, newest first."""
    try:
        products = await db.catalog.list_products(search=search, category=category)
    except Exception as e:
        logger.error(f"Failed to load products: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    return {"products": [serialize_product(p) for p in products], "count": len(products)}


@router.get("/products/featured")
async def featured_products(limit: int = 8, db: Database = Depends(get_db)):
    try:
        products = await db.catalog.get_featured(limit)
    except Exception as e:
        logger.error(f"Failed to load featured products: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    return {"products": [serialize_product(p) for p in products]}


@router.get("/products/{product_id}")
async def product_detail(product_id: str, db: Database = Depends(get_db)):
    """Single product with up to four related products from its category."""
    try:
        product = await db.catalog.get_product(product_id)
        related = await db.catalog.get_related(product) if product else []
    except Exception as e:
        logger.error(f"Failed to load product {sanitize_id_for_logging(product_id)}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    if product is None:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)

    return {
        **serialize_product(product),
        "related": [serialize_product(p) for p in related],
    }


@router.get("/categories")
async def list_categories(db: Database = Depends(get_db)):
    try:
        categories = await db.catalog.list_categories()
    except Exception as e:
        logger.error(f"Failed to load categories: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    return {"categories": categories}


@router.get("/stats")
async def public_stats(db: Database = Depends(get_db)):
    """Home page counters."""
    try:
        return await db.reports.get_public_stats()
    except Exception as e:
        logger.error(f"Failed to load stats: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

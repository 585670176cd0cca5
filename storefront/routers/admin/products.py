"""
Admin Products Router

Product catalog management.
"""
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends

from storefront.auth import require_staff
from storefront.errors import ERROR_PRODUCT_NOT_FOUND, ERROR_SERVICE_UNAVAILABLE
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.routers.deps import get_db
from storefront.routers.serializers import serialize_product
from storefront.services.database import Database
from storefront.services.domains.backoffice import filter_products, product_payload
from .models import CreateProductRequest

logger = get_logger(__name__)

router = APIRouter(tags=["admin-products"])


@router.get("/products")
async def admin_get_products(
    search: Optional[str] = None,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    """All products, newest first"""
    try:
        products = await db.products.get_all()
    except Exception as e:
        logger.error(f"Failed to load products: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    products = filter_products(products, search)
    return {"products": [serialize_product(p) for p in products], "count": len(products)}


@router.post("/products")
async def admin_create_product(
    request: CreateProductRequest,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    """Create a new product"""
    try:
        product = await db.products.create(product_payload(request.model_dump()))
    except Exception as e:
        logger.error(f"Failed to create product: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    logger.info(f"Product {sanitize_id_for_logging(product.id)} created by {sanitize_id_for_logging(staff.user.id)}")
    return {"success": True, "product": serialize_product(product)}


@router.put("/products/{product_id}")
async def admin_update_product(
    product_id: str,
    request: CreateProductRequest,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    """Update a product"""
    try:
        product = await db.products.update(product_id, product_payload(request.model_dump()))
    except Exception as e:
        logger.error(f"Failed to update product {sanitize_id_for_logging(product_id)}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    if product is None:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    return {"success": True, "product": serialize_product(product)}


@router.delete("/products/{product_id}")
async def admin_delete_product(
    product_id: str,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    """Permanently delete a product"""
    try:
        deleted = await db.products.delete(product_id)
    except Exception as e:
        logger.error(f"Failed to delete product {sanitize_id_for_logging(product_id)}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    if not deleted:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    return {"success": True, "deleted": True}

"""
Admin Customers Router

Customer records management.
"""
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends

from storefront.auth import require_staff
from storefront.errors import ERROR_CUSTOMER_NOT_FOUND, ERROR_SERVICE_UNAVAILABLE
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.routers.deps import get_db
from storefront.routers.serializers import serialize_customer
from storefront.services.database import Database
from storefront.services.domains.backoffice import filter_customers
from .models import CreateCustomerRequest

logger = get_logger(__name__)

router = APIRouter(tags=["admin-customers"])


@router.get("/customers")
async def admin_get_customers(
    search: Optional[str] = None,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    try:
        customers = await db.customers.get_all()
    except Exception as e:
        logger.error(f"Failed to load customers: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    customers = filter_customers(customers, search)
    return {"customers": [serialize_customer(c) for c in customers], "count": len(customers)}


@router.get("/customers/{customer_id}")
async def admin_get_customer(
    customer_id: str,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    try:
        customer = await db.customers.get_by_id(customer_id)
    except Exception as e:
        logger.error(f"Failed to load customer {sanitize_id_for_logging(customer_id)}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    if customer is None:
        raise HTTPException(status_code=404, detail=ERROR_CUSTOMER_NOT_FOUND)
    return serialize_customer(customer)


@router.post("/customers")
async def admin_create_customer(
    request: CreateCustomerRequest,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    try:
        customer = await db.customers.create(request.model_dump())
    except Exception as e:
        logger.error(f"Failed to create customer: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    return {"success": True, "customer": serialize_customer(customer)}


@router.put("/customers/{customer_id}")
async def admin_update_customer(
    customer_id: str,
    request: CreateCustomerRequest,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    try:
        customer = await db.customers.update(customer_id, request.model_dump())
    except Exception as e:
        logger.error(f"Failed to update customer {sanitize_id_for_logging(customer_id)}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    if customer is None:
        raise HTTPException(status_code=404, detail=ERROR_CUSTOMER_NOT_FOUND)
    return {"success": True, "customer": serialize_customer(customer)}


@router.delete("/customers/{customer_id}")
async def admin_delete_customer(
    customer_id: str,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    try:
        deleted = await db.customers.delete(customer_id)
    except Exception as e:
        logger.error(f"Failed to delete customer {sanitize_id_for_logging(customer_id)}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    if not deleted:
        raise HTTPException(status_code=404, detail=ERROR_CUSTOMER_NOT_FOUND)
    return {"success": True, "deleted": True}

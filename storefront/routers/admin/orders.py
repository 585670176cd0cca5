"""
Admin Orders Router

Order listing with filters, order detail, and status updates.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Depends

from storefront.auth import require_staff
from storefront.errors import ERROR_ORDER_NOT_FOUND, ERROR_SERVICE_UNAVAILABLE
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.routers.deps import get_db
from storefront.routers.serializers import serialize_order
from storefront.services.database import Database
from storefront.services.domains.backoffice import filter_orders
from storefront.services.models import OrderStatus, PaymentStatus
from .models import UpdateOrderStatusRequest, UpdatePaymentStatusRequest

logger = get_logger(__name__)

router = APIRouter(tags=["admin-orders"])


@router.get("/orders")
async def admin_get_orders(
    search: Optional[str] = None,
    order_status: Optional[OrderStatus] = None,
    payment_status: Optional[PaymentStatus] = None,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    """All orders with items, newest first, filtered by search and statuses"""
    try:
        orders = await db.orders.get_all()
    except Exception as e:
        logger.error(f"Failed to load orders: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    orders = filter_orders(orders, search, order_status, payment_status)
    return {"orders": [serialize_order(o) for o in orders], "count": len(orders)}


@router.get("/orders/{order_id}")
async def admin_get_order(
    order_id: str,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    try:
        order = await db.orders.get_by_id(order_id)
    except Exception as e:
        logger.error(f"Failed to load order {sanitize_id_for_logging(order_id)}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    if order is None:
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)
    return serialize_order(order)


async def _update_order(db: Database, order_id: str, data: Dict[str, Any]):
    try:
        order = await db.orders.update(order_id, data)
    except Exception as e:
        logger.error(f"Failed to update order {sanitize_id_for_logging(order_id)}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    if order is None:
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)
    return {"success": True, "order": serialize_order(order)}


@router.patch("/orders/{order_id}/status")
async def admin_update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    return await _update_order(db, order_id, {"order_status": request.order_status.value})


@router.patch("/orders/{order_id}/payment")
async def admin_update_payment_status(
    order_id: str,
    request: UpdatePaymentStatusRequest,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    return await _update_order(db, order_id, {"payment_status": request.payment_status.value})

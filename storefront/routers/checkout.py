"""
Storefront Checkout Router

Places an order from the visitor's cart. Signed-in staff placing an
order on a customer's behalf are recorded as `created_by`.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.auth import SessionStore, get_session_store
from storefront.cart import CartStore
from storefront.errors import (
    ERROR_EMPTY_CART,
    ERROR_INSUFFICIENT_STOCK,
    ERROR_ORDER_FAILED,
    ERROR_SERVICE_UNAVAILABLE,
    EmptyCartError,
    OrderPlacementError,
)
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.database import Database
from storefront.services.domains import CustomerDetails
from .deps import get_cart, get_db
from .models import CheckoutRequest
from .serializers import serialize_order

logger = get_logger(__name__)

router = APIRouter(tags=["checkout"])


async def _ensure_in_stock(cart: CartStore, db: Database) -> None:
    """Refuse checkout when live stock no longer covers a cart line."""
    for item in cart.items:
        try:
            stock = await db.products.get_stock(item.product_id)
        except Exception as e:
            logger.error(f"Failed to read stock for {sanitize_id_for_logging(item.product_id)}: {e}", exc_info=True)
            raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

        if stock is None or item.quantity > stock:
            logger.info(
                f"Checkout refused: product {sanitize_id_for_logging(item.product_id)} "
                f"has {stock} left, cart wants {item.quantity}"
            )
            raise HTTPException(status_code=400, detail=ERROR_INSUFFICIENT_STOCK)


@router.post("/checkout")
async def checkout(
    request: CheckoutRequest,
    cart: CartStore = Depends(get_cart),
    session: SessionStore = Depends(get_session_store),
    db: Database = Depends(get_db),
):
    await _ensure_in_stock(cart, db)

    details = CustomerDetails(
        name=request.customer_name,
        phone=request.customer_phone,
        address=request.customer_address,
        payment_method=request.payment_method,
        notes=request.notes,
        voucher_code=request.voucher_code,
    )
    user = session.state.user

    try:
        order = await db.checkout.place_order(cart, details, created_by=user.id if user else None)
    except EmptyCartError:
        raise HTTPException(status_code=400, detail=ERROR_EMPTY_CART)
    except OrderPlacementError:
        raise HTTPException(status_code=502, detail=ERROR_ORDER_FAILED)

    return {"success": True, "order": serialize_order(order)}

"""
Storefront Cart Router

The cart store never checks stock; these handlers refuse quantities
above the product's stock the way the shop UI disables its "+" button.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.cart import CartStore
from storefront.errors import ERROR_INSUFFICIENT_STOCK, ERROR_PRODUCT_NOT_FOUND, ERROR_SERVICE_UNAVAILABLE
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.database import Database
from .deps import get_cart, get_db
from .models import AddToCartRequest, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(tags=["cart"])


@router.get("/cart")
async def get_cart_contents(cart: CartStore = Depends(get_cart)):
    return cart.to_dict()


@router.post("/cart/items")
async def add_to_cart(
    request: AddToCartRequest,
    cart: CartStore = Depends(get_cart),
    db: Database = Depends(get_db),
):
    """Add a product, snapshotting its current details into the cart."""
    try:
        product = await db.catalog.get_product(request.product_id)
    except Exception as e:
        logger.error(f"Failed to load product {sanitize_id_for_logging(request.product_id)}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    if product is None:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)

    if cart.quantity_of(product.id) + request.quantity > product.stock:
        raise HTTPException(status_code=400, detail=ERROR_INSUFFICIENT_STOCK)

    cart.add_item(product, request.quantity)
    return cart.to_dict()


@router.patch("/cart/items/{product_id}")
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    cart: CartStore = Depends(get_cart),
):
    """Set a line's quantity; zero or less removes it."""
    item = cart.get_item(product_id)
    if item is not None and request.quantity > item.product.stock:
        raise HTTPException(status_code=400, detail=ERROR_INSUFFICIENT_STOCK)

    cart.update_quantity(product_id, request.quantity)
    return cart.to_dict()


@router.delete("/cart/items/{product_id}")
async def remove_cart_item(product_id: str, cart: CartStore = Depends(get_cart)):
    cart.remove_item(product_id)
    return cart.to_dict()


@router.delete("/cart")
async def clear_cart(cart: CartStore = Depends(get_cart)):
    cart.clear_cart()
    return cart.to_dict()

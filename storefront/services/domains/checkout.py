"""
Checkout Domain Service

Turns a visitor's cart into an order. Placement is a sequence of
independent remote writes:

1. insert the order row
2. insert its order items
3. decrement stock for each product

The hosted database offers no transaction spanning these calls, so a
failure after step 1 leaves the order without items or with stock only
partly decremented. Nothing is rolled back; the failure is logged and
raised as OrderPlacementError carrying the order id for manual
reconciliation. The cart is cleared only after every step succeeded.
"""

from dataclasses import dataclass
from typing import Optional

from storefront.cart import CartStore
from storefront.errors import EmptyCartError, OrderPlacementError
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.models import Order, OrderItem, OrderStatus, PaymentMethod, PaymentStatus
from storefront.services.money import to_float
from storefront.services.repositories import OrderRepository, ProductRepository

logger = get_logger(__name__)

STEP_ORDER = "create_order"
STEP_ITEMS = "create_order_items"
STEP_STOCK = "decrement_stock"


@dataclass
class CustomerDetails:
    """Contact and delivery details entered at checkout."""
    name: str
    phone: str
    address: str
    payment_method: PaymentMethod = PaymentMethod.COD
    notes: str = ""
    voucher_code: str = ""


class CheckoutService:
    """Order placement from a cart."""

    def __init__(self, orders: OrderRepository, products: ProductRepository):
        self.orders = orders
        self.products = products

    async def place_order(
        self,
        cart: CartStore,
        details: CustomerDetails,
        created_by: Optional[str] = None,
    ) -> Order:
        """
        Place an order for the cart contents and clear the cart.

        Raises:
            EmptyCartError: the cart has no items
            OrderPlacementError: a remote write failed; `order_id` is set
                when the order row already exists
        """
        if cart.is_empty:
            raise EmptyCartError()

        total = to_float(cart.total)
        order_data = {
            "customer_name": details.name,
            "customer_phone": details.phone,
            "customer_address": details.address,
            "subtotal": total,
            "discount": 0,
            "shipping_cost": 0,
            "total": total,
            "payment_method": details.payment_method.value,
            "payment_status": PaymentStatus.PENDING.value,
            "order_status": OrderStatus.PENDING.value,
            "notes": details.notes,
            "voucher_code": details.voucher_code,
            "created_by": created_by,
        }

        try:
            order = await self.orders.create(order_data)
        except Exception as e:
            logger.error(f"Order insert failed: {e}", exc_info=True)
            raise OrderPlacementError(STEP_ORDER) from e

        order_id = order.id
        items = [
            {
                "order_id": order_id,
                "product_id": item.product_id,
                "product_name": item.product.name,
                "quantity": item.quantity,
                "price": to_float(item.unit_price),
                "total": to_float(item.line_total),
            }
            for item in cart.items
        ]

        try:
            await self.orders.create_items(items)
        except Exception as e:
            logger.error(
                f"Order {sanitize_id_for_logging(order_id)} written without items: {e}",
                exc_info=True,
            )
            raise OrderPlacementError(STEP_ITEMS, order_id) from e

        for item in cart.items:
            try:
                await self._decrement_stock(item.product_id, item.quantity)
            except Exception as e:
                logger.error(
                    f"Stock decrement failed for product {sanitize_id_for_logging(item.product_id)} "
                    f"in order {sanitize_id_for_logging(order_id)}: {e}",
                    exc_info=True,
                )
                raise OrderPlacementError(STEP_STOCK, order_id) from e

        order.items = [OrderItem(**row) for row in items]
        cart.clear_cart()
        logger.info(f"Order {sanitize_id_for_logging(order_id)} placed ({len(items)} lines, total {total})")
        return order

    async def _decrement_stock(self, product_id: str, quantity: int) -> None:
        """Read current stock and write it back reduced, never below zero."""
        current = await self.products.get_stock(product_id)
        if current is None:
            logger.warning(f"Product {sanitize_id_for_logging(product_id)} vanished before stock update")
            return
        if current < quantity:
            # Sold concurrently between the checkout stock check and this write
            logger.warning(
                f"Product {sanitize_id_for_logging(product_id)} oversold: {current} left, {quantity} ordered"
            )
        await self.products.set_stock(product_id, max(0, current - quantity))

"""
Observable in-memory cart for one visitor.

Every operation is total: nothing here raises for unknown ids or
odd quantities. Stock limits are the caller's concern.
"""
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from storefront.services.models import Product
from storefront.services.money import money_sum, to_float
from .models import CartItem


CartListener = Callable[["CartStore"], None]


class CartStore:
    """
    Collection of (product snapshot, quantity) pairs with derived totals.

    Invariants:
    - every stored quantity is >= 1
    - a product id appears at most once

    Listeners registered with `subscribe` are called synchronously, in
    registration order, after each operation that changed the contents.
    """

    def __init__(self):
        self._items: Dict[str, CartItem] = {}
        self._listeners: List[CartListener] = []

    # ==================== READS ====================

    @property
    def items(self) -> List[CartItem]:
        """Cart lines in insertion order (a copy; mutate through the store)."""
        return list(self._items.values())

    @property
    def item_count(self) -> int:
        """Sum of quantities across all lines."""
        return sum(item.quantity for item in self._items.values())

    @property
    def total(self) -> Decimal:
        """Sum of price x quantity across all lines."""
        return money_sum(item.line_total for item in self._items.values())

    @property
    def is_empty(self) -> bool:
        return not self._items

    def get_item(self, product_id: str) -> Optional[CartItem]:
        return self._items.get(product_id)

    def quantity_of(self, product_id: str) -> int:
        item = self._items.get(product_id)
        return item.quantity if item else 0

    # ==================== MUTATIONS ====================

    def add_item(self, product: Product, quantity: int = 1) -> None:
        """Add `quantity` units; an existing line for the same product id grows."""
        if quantity <= 0:
            return

        existing = self._items.get(product.id)
        if existing:
            existing.quantity += quantity
        else:
            self._items[product.id] = CartItem(product=product.model_copy(deep=True), quantity=quantity)
        self._notify()

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or below removes the line."""
        if quantity <= 0:
            self.remove_item(product_id)
            return

        item = self._items.get(product_id)
        if item is None or item.quantity == quantity:
            return
        item.quantity = quantity
        self._notify()

    def remove_item(self, product_id: str) -> None:
        if self._items.pop(product_id, None) is not None:
            self._notify()

    def clear_cart(self) -> None:
        if not self._items:
            return
        self._items.clear()
        self._notify()

    # ==================== OBSERVERS ====================

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            Unsubscribe handle; calling it more than once is harmless.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        # Copy so a listener may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(self)

    # ==================== SERIALIZATION ====================

    def to_dict(self) -> dict:
        """Cart summary for API responses."""
        return {
            "is_empty": self.is_empty,
            "items": [item.to_dict() for item in self._items.values()],
            "item_count": self.item_count,
            "total": to_float(self.total),
        }

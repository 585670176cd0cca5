"""Cart package: models, observable store, and per-visitor manager."""
from .models import CartItem
from .store import CartStore
from .service import CartManager, get_cart_manager

__all__ = [
    "CartItem",
    "CartStore",
    "CartManager",
    "get_cart_manager",
]

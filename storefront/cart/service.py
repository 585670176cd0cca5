"""Cart manager: one in-memory CartStore per visitor session."""
from typing import Dict, Optional

from storefront.logging import get_logger, sanitize_id_for_logging
from .store import CartStore

logger = get_logger(__name__)


class CartManager:
    """
    Keeps each visitor's cart in process memory, keyed by session token.

    Carts are never persisted; a restart or session expiry loses them.
    """

    def __init__(self):
        self._carts: Dict[str, CartStore] = {}

    def get_cart(self, session_token: str) -> CartStore:
        """Get the visitor's cart, creating an empty one on first use."""
        cart = self._carts.get(session_token)
        if cart is None:
            cart = CartStore()
            self._carts[session_token] = cart
            logger.debug(f"Created cart for session {sanitize_id_for_logging(session_token)}")
        return cart

    def discard(self, session_token: str) -> None:
        """Drop a visitor's cart (session ended or expired)."""
        if self._carts.pop(session_token, None) is not None:
            logger.debug(f"Discarded cart for session {sanitize_id_for_logging(session_token)}")

    def __len__(self) -> int:
        return len(self._carts)


# Singleton instance
_cart_manager: Optional[CartManager] = None


def get_cart_manager() -> CartManager:
    """Get CartManager singleton."""
    global _cart_manager
    if _cart_manager is None:
        _cart_manager = CartManager()
    return _cart_manager

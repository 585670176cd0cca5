"""
Shared Dependencies for Routers

Handlers receive the database and the visitor's cart through
`Depends`, so tests swap them with `app.dependency_overrides`.
"""

from fastapi import Depends

from storefront.auth import VisitorSession, get_visitor_session
from storefront.cart import CartManager, CartStore, get_cart_manager
from storefront.services.database import Database, get_database_async


async def get_db() -> Database:
    """Database singleton, initialized lazily on first request."""
    return await get_database_async()


def get_cart(
    visitor: VisitorSession = Depends(get_visitor_session),
    manager: CartManager = Depends(get_cart_manager),
) -> CartStore:
    """The calling visitor's cart."""
    return manager.get_cart(visitor.token)

"""
FastAPI Routers Package

All routers are included in api/index.py under the /api prefix.
"""

from storefront.routers.auth import router as auth_router
from storefront.routers.catalog import router as catalog_router
from storefront.routers.cart import router as cart_router
from storefront.routers.checkout import router as checkout_router
from storefront.routers.admin import router as admin_router

__all__ = [
    "auth_router",
    "catalog_router",
    "cart_router",
    "checkout_router",
    "admin_router",
]

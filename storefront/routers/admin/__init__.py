"""
Admin API Router

Back-office endpoints for products, customers, orders, dashboard,
reports and settings. Every route requires a staff role.
"""
from fastapi import APIRouter

from .products import router as products_router
from .customers import router as customers_router
from .orders import router as orders_router
from .dashboard import router as dashboard_router
from .settings import router as settings_router

router = APIRouter(tags=["admin"])

router.include_router(products_router)
router.include_router(customers_router)
router.include_router(orders_router)
router.include_router(dashboard_router)
router.include_router(settings_router)

__all__ = ["router"]

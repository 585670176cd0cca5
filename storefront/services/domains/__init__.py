"""Domain services wrapping repositories."""
from .catalog import CatalogService
from .checkout import CheckoutService, CustomerDetails
from .reports import ReportsService, SalesReport

__all__ = [
    "CatalogService",
    "CheckoutService",
    "CustomerDetails",
    "ReportsService",
    "SalesReport",
]

"""
Repository Pattern for Database Operations

Provides clean separation of concerns:
- ProductRepository: Product catalog, stock
- CustomerRepository: Customer records
- OrderRepository: Orders, order items, sales aggregates
- UserRepository: Staff profiles, activity history
"""
from .product_repo import ProductRepository
from .customer_repo import CustomerRepository
from .order_repo import OrderRepository
from .user_repo import UserRepository

__all__ = [
    "ProductRepository",
    "CustomerRepository",
    "OrderRepository",
    "UserRepository",
]

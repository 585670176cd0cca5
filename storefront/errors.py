"""
Common Error Constants and Exceptions

Centralized error messages to avoid string duplication (SonarQube S1192),
plus the domain exceptions raised by services and mapped to HTTP by routers.
"""

# Auth errors
ERROR_UNAUTHORIZED = "Unauthorized"
ERROR_INVALID_SESSION = "Invalid or expired session token"
ERROR_LOGIN_FAILED = "Login failed. Check your email and password."
ERROR_STAFF_ONLY = "Staff access required"

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_INSUFFICIENT_STOCK = "Requested quantity exceeds available stock"

# Customer errors
ERROR_CUSTOMER_NOT_FOUND = "Customer not found"

# Order errors
ERROR_ORDER_NOT_FOUND = "Order not found"
ERROR_EMPTY_CART = "Cart is empty"
ERROR_ORDER_FAILED = "Failed to create order"

# Generic errors
ERROR_SERVICE_UNAVAILABLE = "Service temporarily unavailable, please try again"
ERROR_NOT_FOUND = "Not found"


class StorefrontError(Exception):
    """Base class for storefront domain errors."""


class AuthenticationError(StorefrontError):
    """Credentials were rejected or the auth service could not be reached."""

    def __init__(self, message: str = ERROR_LOGIN_FAILED):
        super().__init__(message)
        self.message = message


class EmptyCartError(StorefrontError):
    """Checkout attempted with an empty cart."""

    def __init__(self):
        super().__init__(ERROR_EMPTY_CART)


class OrderPlacementError(StorefrontError):
    """
    Order placement failed part way.

    `order_id` is set when the order row was already written, so staff can
    reconcile the partial state; `step` names the write that failed.
    """

    def __init__(self, step: str, order_id: str | None = None):
        super().__init__(f"{ERROR_ORDER_FAILED} (step: {step})")
        self.step = step
        self.order_id = order_id

"""
Storefront API Pydantic Models

Request bodies for session, cart and checkout endpoints.
"""
from pydantic import BaseModel, Field

from storefront.services.models import PaymentMethod


# ==================== AUTH MODELS ====================

class LoginRequest(BaseModel):
    email: str
    password: str


# ==================== CART MODELS ====================

class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int


# ==================== CHECKOUT MODELS ====================

class CheckoutRequest(BaseModel):
    customer_name: str
    customer_phone: str
    customer_address: str
    payment_method: PaymentMethod = PaymentMethod.COD
    notes: str = ""
    voucher_code: str = ""

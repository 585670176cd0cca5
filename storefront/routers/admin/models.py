"""
Admin API Pydantic Models

Shared models for all admin endpoints.
"""
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from storefront.services.models import OrderStatus, PaymentStatus


# ==================== PRODUCT MODELS ====================

class CreateProductRequest(BaseModel):
    name: str
    description: str = ""
    price: float = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    image_url: Optional[str] = None
    category: Optional[str] = None
    tags: Union[List[str], str] = []  # list or "a, b, c"
    is_featured: bool = False
    is_limited_stock: bool = False
    barcode: Optional[str] = None


# ==================== CUSTOMER MODELS ====================

class CreateCustomerRequest(BaseModel):
    name: str
    phone: str
    email: Optional[str] = None
    address: str = ""


# ==================== ORDER MODELS ====================

class UpdateOrderStatusRequest(BaseModel):
    order_status: OrderStatus


class UpdatePaymentStatusRequest(BaseModel):
    payment_status: PaymentStatus


# ==================== SETTINGS MODELS ====================

class UpdateProfileRequest(BaseModel):
    name: str
    email: Optional[str] = None

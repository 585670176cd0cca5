"""Database Models - Pydantic models for all entities."""
from decimal import Decimal
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from storefront.services.money import to_decimal as _to_decimal


class PaymentMethod(str, Enum):
    """How the customer pays. `dp` is a down payment, `cod` cash on delivery."""
    DP = "dp"
    COD = "cod"
    CASH = "cash"
    TRANSFER = "transfer"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    DP_PAID = "dp_paid"
    PAID = "paid"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class Role(str, Enum):
    """Staff roles allowed into the back-office."""
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"

    @classmethod
    def classify(cls, value: Optional[str]) -> Optional["Role"]:
        """Map a raw role string to a Role; anything unknown is not staff."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class Product(BaseModel):
    """Product model."""
    id: str
    name: str
    description: str = ""
    price: Decimal
    stock: int = 0
    image_url: Optional[str] = None
    category: Optional[str] = None
    tags: list[str] = []
    is_featured: bool = False
    is_limited_stock: bool = False
    barcode: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        extra = "ignore"  # Ignore unknown fields from DB

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("description", mode="before")
    @classmethod
    def none_description_to_empty(cls, v):
        return v or ""

    @field_validator("tags", mode="before")
    @classmethod
    def none_tags_to_empty(cls, v):
        return v or []


class Customer(BaseModel):
    """Customer model."""
    id: str
    name: str
    phone: str
    email: Optional[str] = None
    address: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        extra = "ignore"


class OrderItem(BaseModel):
    """Order item model (per-product line in an order)."""
    id: Optional[str] = None
    order_id: str
    product_id: str
    product_name: str
    quantity: int = 1
    price: Decimal
    total: Decimal

    class Config:
        extra = "ignore"

    @field_validator("price", "total", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        return _to_decimal(v)


class Order(BaseModel):
    """Order model.

    Customer contact details are copied onto the order so that the order
    survives edits or deletion of the customer record.
    """
    id: str
    customer_id: Optional[str] = None
    customer_name: str
    customer_phone: str
    customer_address: str = ""
    subtotal: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    shipping_cost: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    payment_method: PaymentMethod = PaymentMethod.COD
    payment_status: PaymentStatus = PaymentStatus.PENDING
    order_status: OrderStatus = OrderStatus.PENDING
    notes: Optional[str] = None
    voucher_code: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: list[OrderItem] = []

    class Config:
        extra = "ignore"

    @field_validator("subtotal", "discount", "shipping_cost", "total", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("items", mode="before")
    @classmethod
    def none_items_to_empty(cls, v):
        return v or []


class User(BaseModel):
    """Staff user profile (public.users, keyed by the auth user id)."""
    id: str
    email: str
    name: str = ""
    role: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        extra = "ignore"


class ActivityLog(BaseModel):
    """Activity log entry written by the back-office."""
    id: str
    user_id: Optional[str] = None
    action: str
    details: dict[str, Any] = {}
    created_at: Optional[datetime] = None

    class Config:
        extra = "ignore"

    @field_validator("details", mode="before")
    @classmethod
    def none_details_to_empty(cls, v):
        return v or {}

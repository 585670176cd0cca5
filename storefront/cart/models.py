"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass
from decimal import Decimal

from storefront.services.models import Product
from storefront.services.money import multiply, to_float


@dataclass
class CartItem:
    """Single cart line: a product snapshot taken at add time and a quantity >= 1."""
    product: Product
    quantity: int

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def unit_price(self) -> Decimal:
        return self.product.price

    @property
    def line_total(self) -> Decimal:
        """Price x quantity for this line."""
        return multiply(self.product.price, self.quantity)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "product_id": self.product.id,
            "product_name": self.product.name,
            "image_url": self.product.image_url,
            "stock": self.product.stock,
            "quantity": self.quantity,
            "unit_price": to_float(self.unit_price),
            "line_total": to_float(self.line_total),
        }

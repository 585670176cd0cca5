"""JSON shapes for entities: Decimal amounts become floats at the API boundary."""
from typing import Any, Dict

from storefront.services.models import Customer, Order, Product
from storefront.services.money import format_money, to_float


def serialize_product(product: Product) -> Dict[str, Any]:
    data = product.model_dump(mode="json")
    data["price"] = to_float(product.price)
    data["price_display"] = format_money(product.price)
    data["in_stock"] = product.stock > 0
    return data


def serialize_customer(customer: Customer) -> Dict[str, Any]:
    return customer.model_dump(mode="json")


def serialize_order(order: Order) -> Dict[str, Any]:
    data = order.model_dump(mode="json")
    for key in ("subtotal", "discount", "shipping_cost", "total"):
        data[key] = to_float(getattr(order, key))
    data["total_display"] = format_money(order.total)
    data["items"] = [
        {**item.model_dump(mode="json"), "price": to_float(item.price), "total": to_float(item.total)}
        for item in order.items
    ]
    return data

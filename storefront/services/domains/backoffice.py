"""
Back-office Domain Service

List filtering and record preparation for the admin screens:
products, customers and orders.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from storefront.services.models import Customer, Order, OrderStatus, PaymentStatus, Product


def parse_tags(tags: Union[str, Iterable[str], None]) -> List[str]:
    """Accept tags as a comma-separated string or a list; trim and drop blanks."""
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    return [tag.strip() for tag in tags if tag and tag.strip()]


def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle in value.lower()


def filter_products(products: List[Product], search: Optional[str] = None) -> List[Product]:
    """Match on name, description, category or barcode."""
    if not search or not search.strip():
        return products
    needle = search.strip().lower()
    return [
        p for p in products
        if _contains(p.name, needle)
        or _contains(p.description, needle)
        or _contains(p.category, needle)
        or _contains(p.barcode, needle)
    ]


def filter_customers(customers: List[Customer], search: Optional[str] = None) -> List[Customer]:
    """Match on name, phone or email."""
    if not search or not search.strip():
        return customers
    needle = search.strip().lower()
    return [
        c for c in customers
        if _contains(c.name, needle) or _contains(c.phone, needle) or _contains(c.email, needle)
    ]


def filter_orders(
    orders: List[Order],
    search: Optional[str] = None,
    order_status: Optional[OrderStatus] = None,
    payment_status: Optional[PaymentStatus] = None,
) -> List[Order]:
    """Match on order id, customer name or phone, then narrow by statuses."""
    filtered = orders
    if search and search.strip():
        needle = search.strip().lower()
        filtered = [
            o for o in filtered
            if _contains(o.id, needle) or _contains(o.customer_name, needle) or _contains(o.customer_phone, needle)
        ]
    if order_status:
        filtered = [o for o in filtered if o.order_status == order_status]
    if payment_status:
        filtered = [o for o in filtered if o.payment_status == payment_status]
    return filtered


def product_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize a product form into a row for insert/update."""
    payload = dict(data)
    if "tags" in payload:
        payload["tags"] = parse_tags(payload["tags"])
    if payload.get("barcode") == "":
        payload["barcode"] = None
    return payload

"""
Dashboard & Reports Domain Service

Aggregates for the back-office dashboard, the public home-page counters,
and date-range sales reports.
"""

import asyncio
import os
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from storefront.services.money import money_sum, to_decimal, to_float
from storefront.services.models import OrderStatus
from storefront.services.repositories import CustomerRepository, OrderRepository, ProductRepository

LOW_STOCK_THRESHOLD = int(os.environ.get("LOW_STOCK_THRESHOLD", "10"))
TOP_PRODUCTS_LIMIT = 10


@dataclass
class ProductSales:
    name: str
    quantity: int = 0
    revenue: Decimal = Decimal("0")


@dataclass
class SalesReport:
    """Sales figures for an inclusive date range."""
    start: date
    end: date
    total_revenue: Decimal = Decimal("0")
    total_orders: int = 0
    total_products: int = 0
    total_customers: int = 0
    monthly: List[Dict[str, Any]] = field(default_factory=list)
    top_products: List[ProductSales] = field(default_factory=list)
    recent_orders: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "total_revenue": to_float(self.total_revenue),
            "total_orders": self.total_orders,
            "total_products": self.total_products,
            "total_customers": self.total_customers,
            "monthly": self.monthly,
            "top_products": [
                {"name": p.name, "quantity": p.quantity, "revenue": to_float(p.revenue)}
                for p in self.top_products
            ],
            "recent_orders": self.recent_orders,
        }


def range_bounds(start: date, end: date) -> tuple[str, str]:
    """Timestamp bounds covering `start` 00:00 through `end` 23:59:59."""
    return start.isoformat(), f"{end.isoformat()}T23:59:59"


def _month_key(created_at: str) -> str:
    # ISO timestamps from Postgres always start with YYYY-MM
    return created_at[:7]


def group_by_month(paid: List[Dict[str, Any]], placed: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Revenue of paid orders and count of all orders per month, oldest month first."""
    buckets: Dict[str, Dict[str, Any]] = {}
    for row in paid:
        bucket = buckets.setdefault(_month_key(row["created_at"]), {"revenue": Decimal("0"), "orders": 0})
        bucket["revenue"] += to_decimal(row.get("total"))
    for row in placed:
        bucket = buckets.setdefault(_month_key(row["created_at"]), {"revenue": Decimal("0"), "orders": 0})
        bucket["orders"] += 1
    return [
        {"month": month, "revenue": to_float(values["revenue"]), "orders": values["orders"]}
        for month, values in sorted(buckets.items())
    ]


def rank_products(rows: List[Dict[str, Any]], limit: int = TOP_PRODUCTS_LIMIT) -> List[ProductSales]:
    """Group order-item rows by product name, best revenue first."""
    stats: Dict[str, ProductSales] = {}
    for row in rows:
        name = row.get("product_name") or "Unknown"
        entry = stats.setdefault(name, ProductSales(name=name))
        entry.quantity += int(row.get("quantity") or 0)
        entry.revenue += to_decimal(row.get("total"))
    return sorted(stats.values(), key=lambda s: s.revenue, reverse=True)[:limit]


class ReportsService:
    """Dashboard counters and sales reports."""

    def __init__(
        self,
        products: ProductRepository,
        orders: OrderRepository,
        customers: CustomerRepository,
    ):
        self.products = products
        self.orders = orders
        self.customers = customers

    async def get_public_stats(self) -> Dict[str, int]:
        """Counters shown on the storefront home page."""
        products, orders, customers = await asyncio.gather(
            self.products.count(),
            self.orders.count(),
            self.customers.count(),
        )
        return {"products": products, "orders": orders, "customers": customers}

    async def get_dashboard(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Back-office dashboard figures."""
        now = now or datetime.now(timezone.utc)
        today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)

        (
            total_products,
            total_orders,
            total_customers,
            paid,
            pending_orders,
            low_stock,
            orders_today,
            delivered_orders,
            recent_orders,
        ) = await asyncio.gather(
            self.products.count(),
            self.orders.count(),
            self.customers.count(),
            self.orders.get_paid_totals(),
            self.orders.count(order_status=OrderStatus.PENDING.value),
            self.products.count_low_stock(LOW_STOCK_THRESHOLD),
            self.orders.count(since=today_start),
            self.orders.count(order_status=OrderStatus.DELIVERED.value),
            self.orders.get_recent(5),
        )

        return {
            "total_products": total_products,
            "total_orders": total_orders,
            "total_customers": total_customers,
            "total_revenue": to_float(money_sum(row.get("total") for row in paid)),
            "pending_orders": pending_orders,
            "low_stock_products": low_stock,
            "orders_today": orders_today,
            "delivered_orders": delivered_orders,
            "recent_orders": recent_orders,
        }

    async def build_report(self, start: date, end: date) -> SalesReport:
        """Sales report for orders created between `start` and `end`, both inclusive."""
        start_ts, end_ts = range_bounds(start, end)

        paid, placed, total_products, total_customers, recent, item_rows = await asyncio.gather(
            self.orders.get_paid_totals(start_ts, end_ts),
            self.orders.get_in_range(start_ts, end_ts),
            self.products.count(),
            self.customers.count(),
            self.orders.get_recent_in_range(start_ts, end_ts),
            self.orders.get_item_sales(start_ts, end_ts),
        )

        return SalesReport(
            start=start,
            end=end,
            total_revenue=money_sum(row.get("total") for row in paid),
            total_orders=len(placed),
            total_products=total_products,
            total_customers=total_customers,
            monthly=group_by_month(paid, placed),
            top_products=rank_products(item_rows),
            recent_orders=recent,
        )

"""Order Repository - Orders, order items and sales aggregates."""
from datetime import datetime
from typing import Optional, List, Dict, Any

from storefront.db import Tables
from storefront.services.models import Order
from .base import BaseRepository


def _to_order(row: Dict[str, Any]) -> Order:
    """Build Order from a row, folding the embedded order_items relation."""
    data = dict(row)
    if "order_items" in data:
        data["items"] = data.pop("order_items")
    return Order(**data)


class OrderRepository(BaseRepository):
    """Order database operations."""

    async def create(self, data: Dict[str, Any]) -> Order:
        """Insert order row and return it."""
        result = await self.client.table(Tables.ORDERS).insert(data).execute()
        return _to_order(result.data[0])

    async def create_items(self, items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Batch insert order_items."""
        if not items:
            return []
        result = await self.client.table(Tables.ORDER_ITEMS).insert(items).execute()
        return result.data

    async def get_all(self) -> List[Order]:
        """Get all orders with their items, newest first."""
        result = await (
            self.client.table(Tables.ORDERS)
            .select("*, order_items(*)")
            .order("created_at", desc=True)
            .execute()
        )
        return [_to_order(o) for o in result.data]

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        """Get order by ID with items."""
        result = await (
            self.client.table(Tables.ORDERS)
            .select("*, order_items(*)")
            .eq("id", order_id)
            .execute()
        )
        return _to_order(result.data[0]) if result.data else None

    async def update(self, order_id: str, data: Dict[str, Any]) -> Optional[Order]:
        result = await self.client.table(Tables.ORDERS).update(data).eq("id", order_id).execute()
        return _to_order(result.data[0]) if result.data else None

    async def get_recent(self, limit: int = 5) -> List[Dict[str, Any]]:
        """Latest orders (summary columns only)."""
        result = await (
            self.client.table(Tables.ORDERS)
            .select("id, customer_name, total, order_status, created_at")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return result.data

    async def count(
        self,
        order_status: Optional[str] = None,
        since: Optional[datetime] = None,
    ) -> int:
        """Count orders, optionally by status and creation time."""
        query = self.client.table(Tables.ORDERS).select("id", count="exact")
        if order_status:
            query = query.eq("order_status", order_status)
        if since:
            query = query.gte("created_at", since.isoformat())
        result = await query.execute()
        return result.count or 0

    async def get_paid_totals(
        self,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """`total` and `created_at` of paid orders, optionally within a range."""
        query = self.client.table(Tables.ORDERS).select("total, created_at").eq("payment_status", "paid")
        if start:
            query = query.gte("created_at", start)
        if end:
            query = query.lte("created_at", end)
        result = await query.execute()
        return result.data

    async def get_in_range(self, start: str, end: str) -> List[Dict[str, Any]]:
        """Ids and timestamps of all orders created within a range."""
        result = await (
            self.client.table(Tables.ORDERS)
            .select("id, created_at")
            .gte("created_at", start)
            .lte("created_at", end)
            .execute()
        )
        return result.data

    async def get_recent_in_range(self, start: str, end: str, limit: int = 10) -> List[Dict[str, Any]]:
        result = await (
            self.client.table(Tables.ORDERS)
            .select("id, customer_name, total, created_at, order_status")
            .gte("created_at", start)
            .lte("created_at", end)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return result.data

    async def get_item_sales(self, start: str, end: str) -> List[Dict[str, Any]]:
        """Order items whose parent order was created within a range."""
        result = await (
            self.client.table(Tables.ORDER_ITEMS)
            .select("product_name, quantity, total, order_id, orders!inner(created_at)")
            .gte("orders.created_at", start)
            .lte("orders.created_at", end)
            .execute()
        )
        return result.data

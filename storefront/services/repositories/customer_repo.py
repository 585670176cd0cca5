"""Customer Repository - Customer records."""
from typing import Optional, List, Dict, Any

from storefront.db import Tables
from storefront.services.models import Customer
from .base import BaseRepository


class CustomerRepository(BaseRepository):
    """Customer database operations."""

    async def get_all(self) -> List[Customer]:
        """Get all customers, newest first."""
        result = await (
            self.client.table(Tables.CUSTOMERS)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [Customer(**c) for c in result.data]

    async def get_by_id(self, customer_id: str) -> Optional[Customer]:
        result = await self.client.table(Tables.CUSTOMERS).select("*").eq("id", customer_id).execute()
        return Customer(**result.data[0]) if result.data else None

    async def create(self, data: Dict[str, Any]) -> Customer:
        result = await self.client.table(Tables.CUSTOMERS).insert(data).execute()
        return Customer(**result.data[0])

    async def update(self, customer_id: str, data: Dict[str, Any]) -> Optional[Customer]:
        result = await self.client.table(Tables.CUSTOMERS).update(data).eq("id", customer_id).execute()
        return Customer(**result.data[0]) if result.data else None

    async def delete(self, customer_id: str) -> bool:
        result = await self.client.table(Tables.CUSTOMERS).delete().eq("id", customer_id).execute()
        return bool(result.data)

    async def count(self) -> int:
        result = await self.client.table(Tables.CUSTOMERS).select("id", count="exact").execute()
        return result.count or 0

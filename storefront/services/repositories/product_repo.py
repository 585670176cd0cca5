"""Product Repository - Product catalog operations."""
from typing import Optional, List, Dict, Any

from storefront.db import Tables
from storefront.services.models import Product
from .base import BaseRepository


class ProductRepository(BaseRepository):
    """Product database operations."""

    async def get_all(self) -> List[Product]:
        """Get all products, newest first."""
        result = await (
            self.client.table(Tables.PRODUCTS)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [Product(**p) for p in result.data]

    async def get_featured(self, limit: int = 8) -> List[Product]:
        """Get featured products for the home page."""
        result = await (
            self.client.table(Tables.PRODUCTS)
            .select("*")
            .eq("is_featured", True)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [Product(**p) for p in result.data]

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        """Get product by ID."""
        result = await self.client.table(Tables.PRODUCTS).select("*").eq("id", product_id).execute()
        return Product(**result.data[0]) if result.data else None

    async def get_related(self, category: str, exclude_id: str, limit: int = 4) -> List[Product]:
        """Get other products from the same category."""
        result = await (
            self.client.table(Tables.PRODUCTS)
            .select("*")
            .eq("category", category)
            .neq("id", exclude_id)
            .limit(limit)
            .execute()
        )
        return [Product(**p) for p in result.data]

    async def create(self, data: Dict[str, Any]) -> Product:
        """Create new product."""
        result = await self.client.table(Tables.PRODUCTS).insert(data).execute()
        return Product(**result.data[0])

    async def update(self, product_id: str, data: Dict[str, Any]) -> Optional[Product]:
        """Update product."""
        result = await self.client.table(Tables.PRODUCTS).update(data).eq("id", product_id).execute()
        return Product(**result.data[0]) if result.data else None

    async def delete(self, product_id: str) -> bool:
        """Delete product. Returns False if nothing was deleted."""
        result = await self.client.table(Tables.PRODUCTS).delete().eq("id", product_id).execute()
        return bool(result.data)

    async def get_stock(self, product_id: str) -> Optional[int]:
        """Read the current stock level."""
        result = await self.client.table(Tables.PRODUCTS).select("stock").eq("id", product_id).execute()
        if not result.data:
            return None
        return int(result.data[0].get("stock") or 0)

    async def set_stock(self, product_id: str, stock: int) -> None:
        """Overwrite the stock level."""
        await self.client.table(Tables.PRODUCTS).update({"stock": stock}).eq("id", product_id).execute()

    async def count(self) -> int:
        """Count all products."""
        result = await self.client.table(Tables.PRODUCTS).select("id", count="exact").execute()
        return result.count or 0

    async def count_low_stock(self, threshold: int) -> int:
        """Count products with stock strictly below threshold."""
        result = await (
            self.client.table(Tables.PRODUCTS)
            .select("id", count="exact")
            .lt("stock", threshold)
            .execute()
        )
        return result.count or 0

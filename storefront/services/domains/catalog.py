"""
Catalog Domain Service

Product browsing for the storefront: search, category filter,
featured products and related products.
"""

from typing import List, Optional

from storefront.services.models import Product
from storefront.services.repositories import ProductRepository


def matches_search(product: Product, term: str) -> bool:
    """Case-insensitive match on name, description or any tag."""
    needle = term.strip().lower()
    if not needle:
        return True
    if needle in product.name.lower() or needle in product.description.lower():
        return True
    return any(needle in tag.lower() for tag in product.tags)


class CatalogService:
    """Storefront catalog queries."""

    def __init__(self, products: ProductRepository):
        self.products = products

    async def list_products(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Product]:
        """All products newest first, narrowed by search term and exact category."""
        products = await self.products.get_all()
        if search:
            products = [p for p in products if matches_search(p, search)]
        if category:
            products = [p for p in products if p.category == category]
        return products

    async def list_categories(self) -> List[str]:
        """Distinct non-empty categories, in order of first appearance."""
        products = await self.products.get_all()
        seen: List[str] = []
        for product in products:
            if product.category and product.category not in seen:
                seen.append(product.category)
        return seen

    async def get_featured(self, limit: int = 8) -> List[Product]:
        return await self.products.get_featured(limit)

    async def get_product(self, product_id: str) -> Optional[Product]:
        return await self.products.get_by_id(product_id)

    async def get_related(self, product: Product, limit: int = 4) -> List[Product]:
        """Other products in the same category; none when the product has no category."""
        if not product.category:
            return []
        return await self.products.get_related(product.category, product.id, limit)

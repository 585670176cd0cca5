"""
Supabase Database Service

Provides the Database container: repositories over the async Supabase
client plus the domain services built on them.

Usage:
    from storefront.services.database import get_database

    # In async context (after init_database() called at startup):
    db = get_database()
    products = await db.catalog.list_products(search="kursi")

    # At FastAPI startup (lifespan):
    await init_database()
"""

import asyncio
from typing import Optional

from supabase._async.client import AsyncClient

from storefront.db import get_supabase, reset_supabase
from storefront.logging import get_logger
from storefront.services.domains import CatalogService, CheckoutService, ReportsService
from storefront.services.repositories import (
    CustomerRepository,
    OrderRepository,
    ProductRepository,
    UserRepository,
)

logger = get_logger(__name__)


class Database:
    """
    Supabase-backed data access.

    Must be created via `Database.create()` or `init_database()` so the
    async client exists; tests construct it directly with a mock client.
    """

    def __init__(self, client: AsyncClient):
        self.client = client

        # Repositories
        self.products = ProductRepository(self.client)
        self.customers = CustomerRepository(self.client)
        self.orders = OrderRepository(self.client)
        self.users = UserRepository(self.client)

        # Domains
        self.catalog = CatalogService(self.products)
        self.checkout = CheckoutService(self.orders, self.products)
        self.reports = ReportsService(self.products, self.orders, self.customers)

    @classmethod
    async def create(cls) -> "Database":
        """Async factory: create the service-role client and wire repositories."""
        client = await get_supabase()
        return cls(client)


# Singleton instance (initialized at startup via init_database() or lazily)
_db: Optional[Database] = None
_db_lock: Optional[asyncio.Lock] = None


def _get_lock() -> asyncio.Lock:
    """Get or create async lock for initialization."""
    global _db_lock
    if _db_lock is None:
        _db_lock = asyncio.Lock()
    return _db_lock


async def init_database() -> Database:
    """Initialize the async database singleton.

    Safe to call concurrently; the first caller creates the client.
    """
    global _db
    if _db is not None:
        return _db

    async with _get_lock():
        if _db is None:
            logger.info("Initializing async Supabase client...")
            _db = await Database.create()
            logger.info("Async Supabase client initialized successfully")
    return _db


async def close_database() -> None:
    """Drop the database singleton (FastAPI shutdown)."""
    global _db
    if _db is not None:
        _db = None
        reset_supabase()
        logger.info("Supabase client released")


async def get_database_async() -> Database:
    """Get database instance with lazy async initialization."""
    if _db is None:
        return await init_database()
    return _db


def get_database() -> Database:
    """Get database instance (sync accessor).

    Raises:
        RuntimeError: If init_database() has not run yet
    """
    if _db is None:
        raise RuntimeError(
            "Database not initialized. Use 'await get_database_async()' for lazy init, "
            "or call 'await init_database()' at startup."
        )
    return _db


def set_database(db: Optional[Database]) -> None:
    """Install a Database instance directly (tests, scripts)."""
    global _db
    _db = db

"""
Database Module - Supabase Clients

Provides:
- Async service-role Supabase client (singleton) for table operations
- Fresh async anon-key clients for per-visitor authentication
"""

import os
from typing import Optional

from supabase._async.client import AsyncClient, create_client as acreate_client
from supabase.lib.client_options import AsyncClientOptions


SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")


_async_supabase_client: Optional[AsyncClient] = None


async def get_supabase() -> AsyncClient:
    """
    Get async service-role Supabase client (singleton).
    Used for all table reads and writes.
    """
    global _async_supabase_client

    if _async_supabase_client is None:
        if not SUPABASE_URL or not SUPABASE_SERVICE_ROLE_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
        _async_supabase_client = await acreate_client(SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)

    return _async_supabase_client


async def create_auth_client() -> AsyncClient:
    """
    Create a new anon-key client owning one visitor's auth session.

    Each signed-in visitor gets their own client so that GoTrue session state
    never leaks between visitors or into the shared service-role client.
    """
    if not SUPABASE_URL or not SUPABASE_ANON_KEY:
        raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
    return await acreate_client(
        SUPABASE_URL,
        SUPABASE_ANON_KEY,
        options=AsyncClientOptions(persist_session=False, auto_refresh_token=False),
    )


def reset_supabase() -> None:
    """Drop the cached service-role client (used on shutdown)."""
    global _async_supabase_client
    _async_supabase_client = None


# Table names
class Tables:
    """Supabase table names."""

    PRODUCTS = "products"
    CUSTOMERS = "customers"
    ORDERS = "orders"
    ORDER_ITEMS = "order_items"
    USERS = "users"
    ACTIVITY_LOGS = "activity_logs"

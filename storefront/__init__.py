"""
Storefront Core Package

Infrastructure and domain components:
- db: Supabase clients
- cart: observable per-visitor cart store
- auth: session store and visitor sessions
- services: repositories, domain services, models
- routers: FastAPI routers

Note: Imports are lazy to keep module loading light in serverless environments.
"""

__all__ = [
    "get_supabase",
    "get_database",
]


def __getattr__(name):
    """Lazy attribute access for clean serverless loading."""
    if name == "get_supabase":
        from storefront.db import get_supabase
        return get_supabase
    elif name == "get_database":
        from storefront.services.database import get_database
        return get_database
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")

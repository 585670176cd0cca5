"""
Storefront - Main FastAPI Application

Single entry point for the public storefront API and the staff back office.
"""
import os
import sys
from pathlib import Path
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Vercel runs this file without installing the project
_base_path = Path(__file__).parent.parent
if str(_base_path) not in sys.path:
    sys.path.insert(0, str(_base_path))

from storefront.auth.session import clear_web_sessions
from storefront.logging import get_logger
from storefront.routers import (
    admin_router,
    auth_router,
    cart_router,
    catalog_router,
    checkout_router,
)
from storefront.services.database import close_database, init_database

logger = get_logger(__name__)

CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]


# ==================== FASTAPI APP ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    try:
        await init_database()
    except Exception as e:
        # Requests retry the lazy init through get_database_async()
        logger.error(f"Database initialization failed at startup: {e}")
    yield
    # Shutdown
    clear_web_sessions()
    await close_database()


app = FastAPI(
    title="Storefront",
    description="Furniture storefront and back-office API",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=CORS_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/api")
app.include_router(catalog_router, prefix="/api")
app.include_router(cart_router, prefix="/api")
app.include_router(checkout_router, prefix="/api")
app.include_router(admin_router, prefix="/api/admin")


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "storefront"}

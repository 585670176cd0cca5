"""
Admin Dashboard & Reports Router

Business counters and date-range sales reports.
"""
from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from storefront.auth import require_staff
from storefront.errors import ERROR_SERVICE_UNAVAILABLE
from storefront.logging import get_logger
from storefront.routers.deps import get_db
from storefront.services.database import Database

logger = get_logger(__name__)

router = APIRouter(tags=["admin-dashboard"])

DEFAULT_REPORT_DAYS = 30


@router.get("/dashboard")
async def admin_dashboard(db: Database = Depends(get_db), staff=Depends(require_staff)):
    try:
        return await db.reports.get_dashboard()
    except Exception as e:
        logger.error(f"Failed to load dashboard: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)


@router.get("/reports")
async def admin_sales_report(
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: Database = Depends(get_db),
    staff=Depends(require_staff),
):
    """Sales report; defaults to the last 30 days ending today"""
    end = end or date.today()
    start = start or end - timedelta(days=DEFAULT_REPORT_DAYS)
    if start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")

    try:
        report = await db.reports.build_report(start, end)
    except Exception as e:
        logger.error(f"Failed to build sales report: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    return report.to_dict()

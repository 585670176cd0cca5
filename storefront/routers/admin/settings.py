"""
Admin Settings Router

The signed-in staff member's profile and activity history.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.auth import SessionState, require_staff
from storefront.errors import ERROR_NOT_FOUND, ERROR_SERVICE_UNAVAILABLE
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.routers.deps import get_db
from storefront.services.database import Database
from storefront.services.models import Role
from .models import UpdateProfileRequest

logger = get_logger(__name__)

router = APIRouter(tags=["admin-settings"])


@router.get("/settings/profile")
async def get_profile(db: Database = Depends(get_db), staff: SessionState = Depends(require_staff)):
    try:
        user = await db.users.get_by_id(staff.user.id)
    except Exception as e:
        logger.error(f"Failed to load profile {sanitize_id_for_logging(staff.user.id)}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    if user is None:
        raise HTTPException(status_code=404, detail=ERROR_NOT_FOUND)
    return user.model_dump(mode="json")


@router.put("/settings/profile")
async def update_profile(
    request: UpdateProfileRequest,
    db: Database = Depends(get_db),
    staff: SessionState = Depends(require_staff),
):
    try:
        user = await db.users.update_profile(staff.user.id, request.model_dump(exclude_none=True))
    except Exception as e:
        logger.error(f"Failed to update profile {sanitize_id_for_logging(staff.user.id)}: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    if user is None:
        raise HTTPException(status_code=404, detail=ERROR_NOT_FOUND)
    return {"success": True, "profile": user.model_dump(mode="json")}


@router.get("/settings/activity")
async def get_activity(
    limit: int = 50,
    db: Database = Depends(get_db),
    staff: SessionState = Depends(require_staff),
):
    """Recent activity; employees only see their own entries"""
    user_id = staff.user.id if staff.role == Role.EMPLOYEE else None
    try:
        logs = await db.users.get_activity(user_id=user_id, limit=limit)
    except Exception as e:
        logger.error(f"Failed to load activity logs: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=ERROR_SERVICE_UNAVAILABLE)

    return {"activity": [log.model_dump(mode="json") for log in logs]}

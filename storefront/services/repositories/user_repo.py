"""User Repository - Staff profiles and their activity history."""
from typing import Any, Dict, List, Optional

from storefront.db import Tables
from storefront.services.models import ActivityLog, User
from .base import BaseRepository


class UserRepository(BaseRepository):
    """Staff user database operations."""

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get staff profile by auth user id."""
        result = await self.client.table(Tables.USERS).select("*").eq("id", user_id).execute()
        return User(**result.data[0]) if result.data else None

    async def get_role(self, user_id: str) -> Optional[str]:
        """Raw role string for a user, or None when no profile exists."""
        result = await self.client.table(Tables.USERS).select("role").eq("id", user_id).execute()
        if not result.data:
            return None
        return result.data[0].get("role")

    async def update_profile(self, user_id: str, data: Dict[str, Any]) -> Optional[User]:
        """Update profile columns (name, email) of a staff user."""
        result = await self.client.table(Tables.USERS).update(data).eq("id", user_id).execute()
        return User(**result.data[0]) if result.data else None

    async def get_activity(self, user_id: Optional[str] = None, limit: int = 50) -> List[ActivityLog]:
        """Recent activity, for one user or everyone when user_id is None."""
        query = self.client.table(Tables.ACTIVITY_LOGS).select("*")
        if user_id:
            query = query.eq("user_id", user_id)
        result = await query.order("created_at", desc=True).limit(limit).execute()
        return [ActivityLog(**row) for row in result.data]

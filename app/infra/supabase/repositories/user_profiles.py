"""User profile repository"""
import logging
from datetime import datetime, timezone
from typing import Optional

from supabase import Client  # type: ignore

from app.models.user import UserProfile, UserProfileCreate, UserProfileUpdate

from .base import BaseRepository

logger = logging.getLogger(__name__)


class UserProfileRepository(BaseRepository[UserProfile, UserProfileCreate, UserProfileUpdate]):
    """Repository for user profiles (one row per user, keyed by user id)"""

    def __init__(self, client: Client):
        super().__init__(client, "user_profiles", UserProfile)

    async def get_or_create(self, user_id: str) -> UserProfile:
        """Return the user's profile, creating a blank one on first use"""
        profile = await self.find_by_id(user_id)
        if profile:
            return profile

        logger.info(f"Creating blank profile for user {user_id}")
        return await self.create(UserProfileCreate(id=user_id, name=""))

    async def update_name(self, user_id: str, name: str) -> Optional[UserProfile]:
        """Set the display name"""
        update_data = UserProfileUpdate(name=name, updated_at=datetime.now(timezone.utc))
        return await self.update_owned(user_id, "id", user_id, update_data)

    async def update_picture_url(self, user_id: str, url: str) -> Optional[UserProfile]:
        """Persist the public URL of the current profile picture"""
        update_data = UserProfileUpdate(profile_picture_url=url, updated_at=datetime.now(timezone.utc))
        return await self.update_owned(user_id, "id", user_id, update_data)

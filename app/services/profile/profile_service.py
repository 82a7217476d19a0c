"""
Profile Service

Handles the user profile:
- fetching the profile and creating it lazily on first login
- renaming
- replacing the profile picture (validate, remove old object, upload, persist URL)
"""

import logging
import time
from typing import Optional

from app import config
from app.errors import InvalidInputError
from app.infra.supabase.repositories.user_profiles import UserProfileRepository
from app.infra.supabase.storage import ProfilePictureStorage
from app.models.user import UserProfile

logger = logging.getLogger(__name__)


def validate_profile_picture(content_type: Optional[str], size: int, max_bytes: Optional[int] = None) -> None:
    """Reject non-image or oversized files before anything touches the network"""
    limit = config.PROFILE_PICTURE_MAX_BYTES if max_bytes is None else max_bytes

    if not content_type or not content_type.startswith("image/"):
        raise InvalidInputError("Please select an image file")

    if size > limit:
        raise InvalidInputError(f"File size must be less than {limit // (1024 * 1024)}MB")


def build_picture_key(user_id: str, file_name: str, now_ms: Optional[int] = None) -> str:
    """Object key for a new upload: ``{user_id}-{epoch_ms}.{ext}``"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    ext = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else "png"
    return f"{user_id}-{now_ms}.{ext}"


class ProfileService:
    """Service for profile reads and updates"""

    def __init__(self, profiles: UserProfileRepository, storage: ProfilePictureStorage):
        self.profiles = profiles
        self.storage = storage

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get the user's profile, None if it was never created"""
        return await self.profiles.find_by_id(user_id)

    async def ensure_profile(self, user_id: str) -> UserProfile:
        """Get the user's profile, creating a blank one if absent"""
        return await self.profiles.get_or_create(user_id)

    async def update_name(self, user_id: str, name: str) -> UserProfile:
        """
        Set the user's display name.

        Raises:
            InvalidInputError: If the name is blank
            ValueError: If the profile does not exist
        """
        name = name.strip()
        if not name:
            raise InvalidInputError("Please enter your name")

        profile = await self.profiles.update_name(user_id, name)
        if not profile:
            raise ValueError(f"Profile not found for user {user_id}")

        logger.info(f"Updated name for user {user_id}")
        return profile

    async def upload_profile_picture(
        self,
        user_id: str,
        file_name: str,
        content: bytes,
        content_type: Optional[str],
        current_url: Optional[str] = None,
    ) -> str:
        """
        Replace the user's profile picture.

        Args:
            user_id: Owner of the profile
            file_name: Original file name (its extension is kept)
            content: Raw file bytes
            content_type: MIME type reported by the client
            current_url: Public URL of the picture being replaced, if any

        Returns:
            Public URL of the new picture

        Raises:
            InvalidInputError: Wrong MIME type or file too large (no network call made)
        """
        validate_profile_picture(content_type, len(content))

        # Profile row exists before any object is stored
        await self.profiles.get_or_create(user_id)

        if current_url:
            old_key = self.storage.key_from_public_url(current_url)
            if old_key:
                try:
                    await self.storage.remove(old_key)
                except Exception as e:
                    logger.warning(f"Could not remove old profile picture {old_key}: {e}")

        key = build_picture_key(user_id, file_name)
        await self.storage.upload(key, content, content_type)

        public_url = self.storage.get_public_url(key)
        await self.profiles.update_picture_url(user_id, public_url)

        logger.info(f"Profile picture updated for user {user_id}: {key}")
        return public_url

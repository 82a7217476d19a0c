"""Supabase Storage access for the profile-pictures bucket"""
import logging
from typing import Optional

from supabase import Client  # type: ignore

from app import config

logger = logging.getLogger(__name__)


class ProfilePictureStorage:
    """Upload, remove and resolve public URLs for profile pictures"""

    def __init__(self, client: Client, bucket: Optional[str] = None):
        self._client = client
        self._bucket = bucket or config.PROFILE_PICTURE_BUCKET

    def _bucket_api(self):
        return self._client.storage.from_(self._bucket)

    async def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Upload a new object; never overwrites an existing one"""
        self._bucket_api().upload(
            path=path,
            file=content,
            file_options={
                "content-type": content_type,
                "cache-control": "3600",
                "upsert": "false",
            },
        )
        logger.info(f"Uploaded {len(content)} bytes to {self._bucket}/{path}")

    async def remove(self, path: str) -> None:
        """Remove an object by its key"""
        self._bucket_api().remove([path])
        logger.info(f"Removed {self._bucket}/{path}")

    def get_public_url(self, path: str) -> str:
        """Public URL of an object"""
        return self._bucket_api().get_public_url(path)

    @staticmethod
    def key_from_public_url(url: str) -> Optional[str]:
        """Object key of a previously issued public URL (its last path segment)"""
        if not url:
            return None
        key = url.split("?", 1)[0].rstrip("/").split("/")[-1]
        return key or None

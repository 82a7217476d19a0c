"""Profile service module"""
from .profile_service import ProfileService, validate_profile_picture, build_picture_key

__all__ = [
    "ProfileService",
    "validate_profile_picture",
    "build_picture_key",
]

"""User Profile domain model"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class UserProfileBase(BaseModel):
    """Base user profile fields"""
    name: Optional[str] = None
    profile_picture_url: Optional[str] = None


class UserProfileCreate(UserProfileBase):
    """User profile creation model"""
    id: str  # UUID as string, equal to the auth user id


class UserProfileUpdate(BaseModel):
    """User profile update model"""
    name: Optional[str] = None
    profile_picture_url: Optional[str] = None
    updated_at: Optional[datetime] = None


class UserProfile(UserProfileBase):
    """Complete user profile model from database"""
    id: str  # UUID as string
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def has_name(self) -> bool:
        return bool(self.name and self.name.strip())

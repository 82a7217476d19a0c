"""Subtask domain model"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, field_validator


class SubtaskBase(BaseModel):
    """Base subtask fields"""
    title: str

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Subtask title must not be empty")
        return value


class SubtaskCreate(SubtaskBase):
    """Subtask creation model"""
    task_id: str
    user_id: str


class SubtaskUpdate(BaseModel):
    """Subtask update model"""
    title: Optional[str] = None
    updated_at: Optional[datetime] = None


class Subtask(SubtaskBase):
    """Complete subtask model from database"""
    id: str
    task_id: str
    user_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

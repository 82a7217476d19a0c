"""Task domain model"""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class TaskPriority(str, Enum):
    """Task priority enum"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    """Task status enum"""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    DONE = "done"


# Columns read by the client. The embedding vector is never selected.
TASK_COLUMNS = "id, user_id, title, priority, status, created_at, updated_at"


class TaskBase(BaseModel):
    """Base task fields for creation"""
    title: str = Field(min_length=1)
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Task title must not be empty")
        return value


class TaskCreate(TaskBase):
    """Task creation model"""
    user_id: str   # UUID as string, always taken from the session


class TaskUpdate(BaseModel):
    """Task update model - all fields optional"""
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    updated_at: Optional[datetime] = None


class Task(TaskBase):
    """Complete task model from database"""
    id: str
    user_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TaskSearchResult(Task):
    """Task returned by semantic search, annotated with its similarity score"""
    similarity: float = Field(ge=0.0, le=1.0)

"""Task repository"""
from datetime import datetime, timezone
from typing import List, Optional

from supabase import Client  # type: ignore

from app.models.task import Task, TaskCreate, TaskUpdate, TaskPriority, TaskStatus, TASK_COLUMNS

from .base import BaseRepository


class TaskRepository(BaseRepository[Task, TaskCreate, TaskUpdate]):
    """Repository for task operations. Every query is scoped to one owner."""

    def __init__(self, client: Client):
        super().__init__(client, "tasks", Task, columns=TASK_COLUMNS)

    async def find_by_user(self, user_id: str) -> List[Task]:
        """Find all tasks for a user, newest first"""
        return await self.find_by_filters({"user_id": user_id}, order_by="created_at", desc=True)

    async def find_owned(self, task_id: str, user_id: str) -> Optional[Task]:
        """Find a task by ID if it belongs to the user"""
        response = (
            self._client.table(self._table_name)
            .select(self._columns)
            .eq("id", task_id)
            .eq("user_id", user_id)
            .execute()
        )

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def update_status(self, task_id: str, user_id: str, status: TaskStatus) -> Optional[Task]:
        """Set a task's status"""
        update_data = TaskUpdate(status=status, updated_at=datetime.now(timezone.utc))
        return await self.update_owned(task_id, "user_id", user_id, update_data)

    async def update_priority(self, task_id: str, user_id: str, priority: TaskPriority) -> Optional[Task]:
        """Set a task's priority"""
        update_data = TaskUpdate(priority=priority, updated_at=datetime.now(timezone.utc))
        return await self.update_owned(task_id, "user_id", user_id, update_data)

    async def delete_for_user(self, task_id: str, user_id: str) -> bool:
        """Delete a task; its subtasks are removed by the database cascade"""
        return await self.delete_owned(task_id, "user_id", user_id)

    async def set_embedding(self, task_id: str, embedding: List[float], user_id: Optional[str] = None) -> bool:
        """Store the embedding vector of a task title

        Returns:
            True when a row was updated
        """
        query = self._client.table(self._table_name).update({"embedding": embedding}).eq("id", task_id)

        if user_id:
            query = query.eq("user_id", user_id)

        response = query.execute()
        return bool(response.data)

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from pydantic import BaseModel
from typing import List
import logging

from app.api.deps import get_embedding_service, get_repositories
from app.infra.supabase.repositories import RepositoryFactory
from app.middleware.auth import get_current_user_id
from app.models.task import Task, TaskCreate, TaskPriority, TaskStatus
from app.services.embeddings import TaskEmbeddingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


class CreateTaskRequest(BaseModel):
    title: str
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING


class UpdateStatusRequest(BaseModel):
    status: TaskStatus


class UpdatePriorityRequest(BaseModel):
    priority: TaskPriority


class TaskResponse(BaseModel):
    task: Task


class TaskListResponse(BaseModel):
    tasks: List[Task]
    count: int


class DeleteResponse(BaseModel):
    success: bool
    message: str


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
):
    """List the caller's tasks, newest first"""
    tasks = await repos.tasks.find_by_user(user_id)

    return {
        "tasks": tasks,
        "count": len(tasks)
    }


@router.post("", response_model=TaskResponse)
async def create_task(
    request: CreateTaskRequest,
    background_tasks: BackgroundTasks,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    embedding_service: TaskEmbeddingService = Depends(get_embedding_service),
):
    """Create a task for the caller and schedule its embedding"""
    if not request.title.strip():
        raise HTTPException(status_code=400, detail="Task title must not be empty")

    task = await repos.tasks.create(TaskCreate(
        user_id=user_id,
        title=request.title,
        priority=request.priority,
        status=request.status,
    ))
    logger.info(f"Created task {task.id} for user {user_id}")

    # Best-effort; the response does not wait for it
    background_tasks.add_task(embedding_service.embed_task_in_background, task.id, task.title, user_id)

    return {"task": task}


@router.patch("/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    task_id: str,
    request: UpdateStatusRequest,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
):
    """Change a task's status"""
    task = await repos.tasks.update_status(task_id, user_id, request.status)

    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    return {"task": task}


@router.patch("/{task_id}/priority", response_model=TaskResponse)
async def update_task_priority(
    task_id: str,
    request: UpdatePriorityRequest,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
):
    """Change a task's priority"""
    task = await repos.tasks.update_priority(task_id, user_id, request.priority)

    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    return {"task": task}


@router.delete("/{task_id}", response_model=DeleteResponse)
async def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
):
    """Delete a task (its subtasks go with it)"""
    success = await repos.tasks.delete_for_user(task_id, user_id)

    if not success:
        raise HTTPException(status_code=404, detail="Task not found")

    return {"success": True, "message": "Task deleted successfully"}

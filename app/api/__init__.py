# API module exports
from app.api import functions, health, profile, subtasks, tasks
from app.api.base import api_router

__all__ = ["functions", "health", "profile", "subtasks", "tasks", "api_router"]

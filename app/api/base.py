from fastapi import APIRouter
from app.api import functions, health, profile, subtasks, tasks

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(tasks.router)
api_router.include_router(subtasks.router)
api_router.include_router(profile.router)
api_router.include_router(functions.router)
api_router.include_router(health.router)

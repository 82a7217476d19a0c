import logging

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from app import config  # noqa: E402
from app.api.base import api_router  # noqa: E402

app = FastAPI(
    title="Task Manager Backend API",
    description="Backend API for the task manager - tasks, subtasks, profiles, AI subtasks and smart search",
    version="1.0.0"
)

# Bearer tokens only, no cookies: keeps Access-Control-Allow-Origin at "*"
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include all API routes
app.include_router(api_router)


@app.get("/")
def read_root():
    return {
        "message": "Task Manager Backend API",
        "docs": "/docs",
        "version": "1.0.0"
    }

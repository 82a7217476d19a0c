"""Domain models for the application"""
from .task import Task, TaskCreate, TaskUpdate, TaskPriority, TaskStatus, TaskSearchResult, TASK_COLUMNS
from .subtask import Subtask, SubtaskCreate, SubtaskUpdate
from .user import UserProfile, UserProfileCreate, UserProfileUpdate

__all__ = [
    'Task', 'TaskCreate', 'TaskUpdate', 'TaskPriority', 'TaskStatus', 'TaskSearchResult', 'TASK_COLUMNS',
    'Subtask', 'SubtaskCreate', 'SubtaskUpdate',
    'UserProfile', 'UserProfileCreate', 'UserProfileUpdate',
]

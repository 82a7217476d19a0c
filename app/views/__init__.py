"""View-models for the application's screens"""
from .auth_view import AuthViewModel, AuthState, OnboardingState
from .context import ViewContext
from .dashboard_view import DashboardViewModel, DashboardState, GenerationState, TaskRecord
from .navigation import InvalidTransition, Navigator, Page
from .profile_view import ProfileViewModel, ProfileState
from .shell import TaskManagerApp

__all__ = [
    "AuthViewModel", "AuthState", "OnboardingState",
    "ViewContext",
    "DashboardViewModel", "DashboardState", "GenerationState", "TaskRecord",
    "InvalidTransition", "Navigator", "Page",
    "ProfileViewModel", "ProfileState",
    "TaskManagerApp",
]

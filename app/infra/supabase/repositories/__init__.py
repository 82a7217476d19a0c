"""Repository factory and exports"""
from supabase import Client
from .tasks import TaskRepository
from .subtasks import SubtaskRepository
from .user_profiles import UserProfileRepository


class RepositoryFactory:
    """Factory for creating repository instances"""

    def __init__(self, client: Client):
        self._client = client
        self._tasks: TaskRepository = None
        self._subtasks: SubtaskRepository = None
        self._user_profiles: UserProfileRepository = None

    @property
    def tasks(self) -> TaskRepository:
        """Get task repository"""
        if self._tasks is None:
            self._tasks = TaskRepository(self._client)
        return self._tasks

    @property
    def subtasks(self) -> SubtaskRepository:
        """Get subtask repository"""
        if self._subtasks is None:
            self._subtasks = SubtaskRepository(self._client)
        return self._subtasks

    @property
    def user_profiles(self) -> UserProfileRepository:
        """Get user profile repository"""
        if self._user_profiles is None:
            self._user_profiles = UserProfileRepository(self._client)
        return self._user_profiles


__all__ = [
    'RepositoryFactory',
    'TaskRepository',
    'SubtaskRepository',
    'UserProfileRepository',
]

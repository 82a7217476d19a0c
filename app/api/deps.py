"""Shared FastAPI dependencies"""
from fastapi import Depends
from supabase import Client  # type: ignore

from app.infra.supabase.client import get_supabase_client
from app.infra.supabase.repositories import RepositoryFactory
from app.infra.supabase.storage import ProfilePictureStorage
from app.services.embeddings import TaskEmbeddingService
from app.services.profile import ProfileService
from app.services.smart_search import SmartSearchService
from app.services.subtask_generator import SubtaskGeneratorService


def get_client() -> Client:
    return get_supabase_client()


def get_repositories(client: Client = Depends(get_client)) -> RepositoryFactory:
    return RepositoryFactory(client)


def get_profile_service(
    client: Client = Depends(get_client),
    repos: RepositoryFactory = Depends(get_repositories),
) -> ProfileService:
    return ProfileService(repos.user_profiles, ProfilePictureStorage(client))


def get_embedding_service(repos: RepositoryFactory = Depends(get_repositories)) -> TaskEmbeddingService:
    return TaskEmbeddingService(repos.tasks)


def get_smart_search_service(
    client: Client = Depends(get_client),
    embedding_service: TaskEmbeddingService = Depends(get_embedding_service),
) -> SmartSearchService:
    return SmartSearchService(client, embedding_service)


def get_subtask_generator() -> SubtaskGeneratorService:
    return SubtaskGeneratorService()

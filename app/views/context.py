"""Collaborators shared by the view-models of one user session"""
from dataclasses import dataclass

from app.clients.functions import FunctionsClient
from app.infra.supabase.auth import AuthClient
from app.infra.supabase.client import create_user_client
from app.infra.supabase.repositories import RepositoryFactory
from app.infra.supabase.storage import ProfilePictureStorage
from app.services.profile import ProfileService


@dataclass
class ViewContext:
    auth: AuthClient
    repos: RepositoryFactory
    profiles: ProfileService
    functions: FunctionsClient

    @classmethod
    def from_client(cls, client, functions: FunctionsClient) -> "ViewContext":
        """Wire every collaborator to one Supabase client"""
        repos = RepositoryFactory(client)
        return cls(
            auth=AuthClient(client),
            repos=repos,
            profiles=ProfileService(repos.user_profiles, ProfilePictureStorage(client)),
            functions=functions,
        )

    @classmethod
    def create(cls) -> "ViewContext":
        """Context backed by a fresh anon-key client and the configured functions URL"""
        return cls.from_client(create_user_client(), FunctionsClient())

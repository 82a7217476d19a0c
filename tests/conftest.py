# tests/conftest.py

from __future__ import annotations

import pytest

from app.infra.supabase.repositories import RepositoryFactory
from app.infra.supabase.storage import ProfilePictureStorage
from app.services.profile import ProfileService
from app.views.context import ViewContext
from app.views.shell import TaskManagerApp

from .fakes import FakeFunctionsClient, FakeSupabaseClient


@pytest.fixture()
def db() -> FakeSupabaseClient:
    """Fresh in-memory Supabase per test"""
    return FakeSupabaseClient()


@pytest.fixture()
def repos(db: FakeSupabaseClient) -> RepositoryFactory:
    return RepositoryFactory(db)


@pytest.fixture()
def profile_service(db: FakeSupabaseClient, repos: RepositoryFactory) -> ProfileService:
    return ProfileService(repos.user_profiles, ProfilePictureStorage(db))


@pytest.fixture()
def functions() -> FakeFunctionsClient:
    return FakeFunctionsClient()


@pytest.fixture()
def ctx(db: FakeSupabaseClient, functions: FakeFunctionsClient) -> ViewContext:
    return ViewContext.from_client(db, functions)


@pytest.fixture()
def shell(ctx: ViewContext) -> TaskManagerApp:
    return TaskManagerApp(ctx)


@pytest.fixture()
def signed_in_user(db: FakeSupabaseClient) -> str:
    """
    An account with an active session and a named profile.

    Returns the user id.
    """
    response = db.auth.sign_up({"email": "grace@example.com", "password": "hunter22"})
    user_id = response.user.id
    db.tables.setdefault("user_profiles", []).append(
        {"id": user_id, "name": "Grace", "profile_picture_url": None, "created_at": db.next_timestamp()}
    )
    db.calls.clear()
    return user_id

"""Supabase infrastructure module"""
from .client import get_supabase_client, create_user_client, reset_supabase_client
from .auth import AuthClient, AuthResult
from .storage import ProfilePictureStorage

__all__ = [
    'get_supabase_client',
    'create_user_client',
    'reset_supabase_client',
    'AuthClient',
    'AuthResult',
    'ProfilePictureStorage',
]

"""Database connection and utilities"""
from functools import lru_cache
from supabase import create_client, Client
from legal_navigator.config import get_settings
from legal_navigator.errors import PersistenceNotConfiguredError


@lru_cache()
def get_supabase_admin() -> Client:
    """
    Get the service role Supabase client (bypasses RLS - use carefully)

    Returns:
        Supabase client for the configured project

    Raises:
        PersistenceNotConfiguredError: If the Supabase URL or key is missing
    """
    settings = get_settings()
    if not settings.supabase_configured:
        raise PersistenceNotConfiguredError()

    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key
    )

"""
Supabase client configuration.
"""

from functools import lru_cache

from supabase import Client, create_client

from shootplan.config import get_settings


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """
    Get a cached Supabase client instance (service role).

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_SERVICE_KEY is not set
    """
    settings = get_settings()
    if not settings.cache_enabled:
        raise ValueError(
            "Supabase URL and key must be set. "
            "Set SUPABASE_URL and SUPABASE_SERVICE_KEY"
        )
    return create_client(settings.supabase_url, settings.supabase_service_key)

# src/dossier/infrastructure/supabase_client.py
"""
Supabase Client

Provides the Supabase client used by the database adapters.

Usage:
    from .supabase_client import get_supabase_client

    client = get_supabase_client()
    result = client.table("documents").select("d_id, e_lhold").execute()
"""

import logging
from typing import Optional

from supabase import Client, create_client

from ..config import SupabaseConfig, get_config
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

# Singleton client
_supabase_client: Optional[Client] = None


def get_supabase_client(settings: Optional[SupabaseConfig] = None) -> Client:
    """
    Get the Supabase client singleton.

    Args:
        settings: Supabase settings (defaults to the global configuration)

    Returns:
        Supabase client

    Raises:
        ConfigurationError: If URL or key is missing, or the client cannot be created
    """
    global _supabase_client

    if _supabase_client is not None:
        return _supabase_client

    settings = settings or get_config().supabase

    if not settings.url or not settings.key:
        raise ConfigurationError("Supabase not configured (missing SUPABASE_URL or SUPABASE_KEY)")

    try:
        _supabase_client = create_client(settings.url, settings.key)
    except Exception as e:
        logger.error(f"❌ Failed to connect to Supabase: {e}")
        raise ConfigurationError(f"Failed to connect to Supabase: {e}") from e

    logger.info(f"✅ Connected to Supabase: {settings.url}")
    return _supabase_client


def reset_supabase_client() -> None:
    """Drop the cached client (used after configuration changes and in tests)."""
    global _supabase_client
    _supabase_client = None

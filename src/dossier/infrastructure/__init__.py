# src/dossier/infrastructure/__init__.py
"""
Infrastructure: backend clients shared by the adapters.
"""

from .supabase_client import get_supabase_client, reset_supabase_client

__all__ = ["get_supabase_client", "reset_supabase_client"]

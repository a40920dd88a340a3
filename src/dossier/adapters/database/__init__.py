# src/dossier/adapters/database/__init__.py
"""
Database adapters package.

Contains concrete implementations of the directory and store ports.
"""

from .supabase import SupabaseDocumentStore, SupabaseEmployeeDirectory
from .local import LocalDocumentStore, LocalEmployeeDirectory, load_local_data

__all__ = [
    "SupabaseDocumentStore",
    "SupabaseEmployeeDirectory",
    "LocalDocumentStore",
    "LocalEmployeeDirectory",
    "load_local_data",
]

# src/dossier/core/container.py
"""
Dependency Injection Container

Central configuration for the adapters the batches run against.
Switching between Supabase and the local in-memory store is a config change;
the jobs never import an adapter directly.

Usage:
    from dossier.core.container import Container

    container = Container()
    store = container.document_store()
    directory = container.employee_directory()
"""

import logging
from typing import Optional

from ..config import DossierConfig, get_config
from .ports import DocumentStoreProtocol, EmployeeDirectoryProtocol

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container.

    Provides factory methods for the directory and store adapters.
    Instances are cached for the lifetime of the container.
    """

    def __init__(
        self,
        config: Optional[DossierConfig] = None,
        employee_directory: Optional[EmployeeDirectoryProtocol] = None,
        document_store: Optional[DocumentStoreProtocol] = None,
    ):
        self._config = config or get_config()
        self._directory_instance = employee_directory
        self._store_instance = document_store
        self._local_data = None

        logger.debug(f"Container initialized: db={self._config.database_type}")

    @property
    def config(self) -> DossierConfig:
        return self._config

    # =============================================================================
    # DATABASE
    # =============================================================================

    def _load_local(self):
        if self._local_data is None:
            from ..adapters.database.local import load_local_data
            path = self._config.local_data_path
            self._local_data = load_local_data(path) if path else {"employees": [], "documents": []}
        return self._local_data

    def employee_directory(self) -> EmployeeDirectoryProtocol:
        """Get the employee directory adapter."""
        if self._directory_instance is None:
            if self._config.database_type == "local":
                from ..adapters.database.local import LocalEmployeeDirectory
                self._directory_instance = LocalEmployeeDirectory(self._load_local()["employees"])
            else:
                from ..adapters.database.supabase import SupabaseEmployeeDirectory
                self._directory_instance = SupabaseEmployeeDirectory(settings=self._config.supabase)
        return self._directory_instance

    def document_store(self) -> DocumentStoreProtocol:
        """Get the document store adapter."""
        if self._store_instance is None:
            if self._config.database_type == "local":
                from ..adapters.database.local import LocalDocumentStore
                self._store_instance = LocalDocumentStore(self._load_local()["documents"])
            else:
                from ..adapters.database.supabase import SupabaseDocumentStore
                self._store_instance = SupabaseDocumentStore(settings=self._config.supabase)
        return self._store_instance


# Global container instance
_container: Optional[Container] = None


def get_container() -> Container:
    """Get the global container."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    """Reset the global container (after config changes or in tests)."""
    global _container
    _container = None

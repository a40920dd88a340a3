# src/dossier/core/ports/protocols.py
"""
Protocol-based Interfaces for the retention batches

Using typing.Protocol for structural subtyping instead of ABC:
- No inheritance required - just implement the methods
- Easier mocking in tests

Read methods raise StoreReadError, write methods raise StoreWriteError.
"""

from typing import Iterable, List, Optional, Protocol, runtime_checkable

from ..models import Document, Employee

# PostgREST request-size limit on `in.(...)` filters
MAX_HOLD_BATCH_SIZE = 500


@runtime_checkable
class EmployeeDirectoryProtocol(Protocol):
    """
    Read-only access to employees.

    Implementations: SupabaseEmployeeDirectory, LocalEmployeeDirectory
    """

    def list_employees(self) -> List[Employee]:
        """Load every employee (e_id, e_status, e_tdate, e_lhold)."""
        ...


@runtime_checkable
class DocumentStoreProtocol(Protocol):
    """
    Document persistence used by the batches.

    Implementations: SupabaseDocumentStore, LocalDocumentStore
    """

    def list_documents(self) -> List[Document]:
        """Load every document with its hold flag and retention fields."""
        ...

    def count_documents(self, e_lhold: Optional[bool] = None) -> int:
        """Count documents, optionally only those with the given hold flag."""
        ...

    def update_document_hold(self, ids: Iterable[str], e_lhold: bool) -> None:
        """Set the hold flag on up to MAX_HOLD_BATCH_SIZE documents."""
        ...

    def update_document_retention(
        self,
        d_id: str,
        d_r_status: str,
        d_r_deletion: Optional[str],
    ) -> None:
        """Write the retention status and deletion date of one document."""
        ...

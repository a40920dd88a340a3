# src/dossier/adapters/database/supabase.py
"""
Supabase Database Adapter

Implements the employee directory and document store ports on top of
Supabase's PostgREST API. This is the production backend.

Reads page through whole tables with `.range()` because PostgREST caps
every response; any client error is logged and re-raised as a store error.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from supabase import Client

from ...config import SupabaseConfig, get_config
from ...core.models import Document, Employee
from ...core.ports import MAX_HOLD_BATCH_SIZE
from ...errors import StoreReadError, StoreWriteError
from ...infrastructure.supabase_client import get_supabase_client

logger = logging.getLogger(__name__)

EMPLOYEE_COLUMNS = "e_id, e_status, e_tdate, e_lhold"
DOCUMENT_COLUMNS = (
    "d_id, e_id, e_lhold, d_date, d_r_taxcode, d_r_trigger, d_r_rule, "
    "d_r_month, d_r_deletion, d_r_status"
)


class _SupabaseAdapter:
    """Shared client handling and paginated reads."""

    def __init__(self, client: Optional[Client] = None, settings: Optional[SupabaseConfig] = None):
        """
        Args:
            client: Supabase client (defaults to the shared singleton)
            settings: Table names and page size (defaults to global config)
        """
        self._client = client
        self._settings = settings or get_config().supabase

    @property
    def client(self) -> Client:
        """Lazy-load Supabase client."""
        if self._client is None:
            self._client = get_supabase_client(self._settings)
        return self._client

    def _select_all(self, table: str, columns: str, order_by: str) -> List[Dict[str, Any]]:
        client = self.client
        page_size = self._settings.page_size
        rows: List[Dict[str, Any]] = []
        start = 0

        try:
            while True:
                result = (
                    client.table(table)
                    .select(columns)
                    .order(order_by)
                    .range(start, start + page_size - 1)
                    .execute()
                )
                page = result.data or []
                rows.extend(page)
                if len(page) < page_size:
                    break
                start += page_size
        except Exception as e:
            logger.error(f"Error reading {table}: {e}")
            raise StoreReadError(f"Failed to load {table}: {e}") from e

        logger.debug(f"Loaded {len(rows)} rows from {table}")
        return rows


class SupabaseEmployeeDirectory(_SupabaseAdapter):
    """Supabase adapter for the employee directory (read-only)."""

    def list_employees(self) -> List[Employee]:
        table = self._settings.employees_table
        return [Employee.from_row(row) for row in self._select_all(table, EMPLOYEE_COLUMNS, "e_id")]


class SupabaseDocumentStore(_SupabaseAdapter):
    """Supabase adapter for the document store."""

    @property
    def _table(self) -> str:
        return self._settings.documents_table

    def list_documents(self) -> List[Document]:
        return [Document.from_row(row) for row in self._select_all(self._table, DOCUMENT_COLUMNS, "d_id")]

    def count_documents(self, e_lhold: Optional[bool] = None) -> int:
        client = self.client
        try:
            query = client.table(self._table).select("d_id", count="exact", head=True)
            if e_lhold is not None:
                query = query.eq("e_lhold", e_lhold)
            result = query.execute()
            return result.count or 0
        except Exception as e:
            logger.error(f"Error counting {self._table}: {e}")
            raise StoreReadError(f"Failed to count {self._table}: {e}") from e

    def update_document_hold(self, ids: Iterable[str], e_lhold: bool) -> None:
        ids = list(ids)
        if not ids:
            return
        if len(ids) > MAX_HOLD_BATCH_SIZE:
            raise ValueError(f"At most {MAX_HOLD_BATCH_SIZE} ids per hold update, got {len(ids)}")

        client = self.client
        try:
            client.table(self._table).update({"e_lhold": e_lhold}).in_("d_id", ids).execute()
        except Exception as e:
            logger.error(f"Error setting e_lhold={e_lhold} on {len(ids)} documents: {e}")
            raise StoreWriteError(f"Failed to update legal hold: {e}") from e

    def update_document_retention(
        self,
        d_id: str,
        d_r_status: str,
        d_r_deletion: Optional[str],
    ) -> None:
        client = self.client
        try:
            client.table(self._table).update({
                "d_r_status": d_r_status,
                "d_r_deletion": d_r_deletion,
            }).eq("d_id", d_id).execute()
        except Exception as e:
            logger.error(f"Error updating retention of document {d_id}: {e}")
            raise StoreWriteError(f"Failed to update retention of document {d_id}: {e}") from e

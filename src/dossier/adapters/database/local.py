# src/dossier/adapters/database/local.py
"""
Local In-Memory Database Adapter

Implements the employee directory and document store ports over plain
dicts, optionally seeded from a YAML file. Used for offline dry runs and
in tests.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from ...core.models import Document, Employee
from ...core.ports import MAX_HOLD_BATCH_SIZE
from ...errors import ConfigurationError

logger = logging.getLogger(__name__)


def load_local_data(path: str) -> Dict[str, List[Dict[str, Any]]]:
    """
    Load seed rows from a YAML file with `employees` and `documents` lists.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    seed_path = Path(path)
    if not seed_path.exists():
        raise ConfigurationError(f"Local data file not found: {seed_path}")

    try:
        with open(seed_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to load local data {seed_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Local data {seed_path} must be a mapping")

    logger.info(f"Loaded local data from {seed_path}: "
                f"{len(data.get('employees') or [])} employees, "
                f"{len(data.get('documents') or [])} documents")
    return {
        "employees": list(data.get("employees") or []),
        "documents": list(data.get("documents") or []),
    }


class LocalEmployeeDirectory:
    """In-memory employee directory."""

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None):
        self._rows = [dict(row) for row in rows or []]

    def list_employees(self) -> List[Employee]:
        return [Employee.from_row(row) for row in self._rows]


class LocalDocumentStore:
    """
    In-memory document store.

    Every write is appended to `write_log` as (operation, payload) so tests
    and dry runs can inspect what a batch did.
    """

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None):
        self._rows: Dict[str, Dict[str, Any]] = {}
        for row in rows or []:
            self._rows[str(row["d_id"])] = dict(row)
        self.write_log: List[Tuple[str, Dict[str, Any]]] = []

    def get(self, d_id: str) -> Optional[Dict[str, Any]]:
        row = self._rows.get(str(d_id))
        return dict(row) if row else None

    def list_documents(self) -> List[Document]:
        return [Document.from_row(self._rows[key]) for key in sorted(self._rows)]

    def count_documents(self, e_lhold: Optional[bool] = None) -> int:
        if e_lhold is None:
            return len(self._rows)
        return sum(1 for row in self._rows.values() if row.get("e_lhold") is e_lhold)

    def update_document_hold(self, ids: Iterable[str], e_lhold: bool) -> None:
        ids = [str(i) for i in ids]
        if len(ids) > MAX_HOLD_BATCH_SIZE:
            raise ValueError(f"At most {MAX_HOLD_BATCH_SIZE} ids per hold update, got {len(ids)}")
        for d_id in ids:
            if d_id in self._rows:
                self._rows[d_id]["e_lhold"] = e_lhold
        self.write_log.append(("hold", {"ids": ids, "e_lhold": e_lhold}))

    def update_document_retention(
        self,
        d_id: str,
        d_r_status: str,
        d_r_deletion: Optional[str],
    ) -> None:
        row = self._rows.get(str(d_id))
        if row is not None:
            row["d_r_status"] = d_r_status
            row["d_r_deletion"] = d_r_deletion
        self.write_log.append(("retention", {
            "d_id": str(d_id),
            "d_r_status": d_r_status,
            "d_r_deletion": d_r_deletion,
        }))

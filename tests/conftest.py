# tests/conftest.py
"""
Pytest configuration and fixtures for the dossier test suite.

Provides:
- Supabase mock client for testing the Supabase adapters
- Local in-memory directory/store fixtures for the batch jobs
- Sample employee and document rows

Note: Tests never hit a real Supabase project.
"""

import os
import pytest
from typing import Any, Dict, List, Optional

# Set test environment before imports
os.environ["DOSSIER_ENV"] = "test"
os.environ["SUPABASE_URL"] = "https://test.supabase.co"
os.environ["SUPABASE_KEY"] = "test-key"

from dossier.adapters.database.local import LocalDocumentStore, LocalEmployeeDirectory
from dossier.config import SupabaseConfig


# ============== Supabase Mock Fixtures ==============

class MockSupabaseResponse:
    """Mock response from Supabase operations."""
    def __init__(self, data: List[Dict] = None, count: int = None):
        self.data = data if data is not None else []
        self.count = count


class MockSupabaseTable:
    """Mock Supabase table with chainable methods."""

    def __init__(self, table_name: str, client: "MockSupabaseClient"):
        self.table_name = table_name
        self._client = client
        self._filters = []
        self._operation = "select"
        self._update_data = None
        self._order_by = None
        self._range = None
        self._count = None
        self._head = False

    def select(self, columns: str = "*", count: Optional[str] = None, head: bool = False):
        self._operation = "select"
        self._client.calls.append((self.table_name, "select", columns))
        self._count = count
        self._head = head
        return self

    def update(self, data: Dict):
        self._operation = "update"
        self._update_data = dict(data)
        return self

    def eq(self, column: str, value: Any):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column: str, values: List[Any]):
        values = list(values)
        self._client.calls.append((self.table_name, "in", len(values)))
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column: str, desc: bool = False):
        self._order_by = (column, desc)
        return self

    def range(self, start: int, end: int):
        self._range = (start, end)
        self._client.calls.append((self.table_name, "range", (start, end)))
        return self

    def execute(self) -> MockSupabaseResponse:
        """Execute the query and return results."""
        error = self._client.errors.get((self.table_name, self._operation))
        if error is not None:
            raise error

        rows = self._client.data_store.setdefault(self.table_name, [])
        matched = [row for row in rows if all(f(row) for f in self._filters)]

        if self._operation == "update":
            for row in matched:
                row.update(self._update_data)
            return MockSupabaseResponse(data=[dict(row) for row in matched])

        if self._order_by:
            column, desc = self._order_by
            matched = sorted(matched, key=lambda row: str(row.get(column)), reverse=desc)

        count = len(matched) if self._count else None
        if self._head:
            return MockSupabaseResponse(data=[], count=count)

        if self._range:
            start, end = self._range
            matched = matched[start:end + 1]

        return MockSupabaseResponse(data=[dict(row) for row in matched], count=count)


class MockSupabaseClient:
    """Mock Supabase client for testing."""

    def __init__(self):
        self.data_store: Dict[str, List[Dict]] = {}
        self.errors: Dict[tuple, Exception] = {}
        self.calls: List[tuple] = []

    def table(self, name: str) -> MockSupabaseTable:
        return MockSupabaseTable(name, self)

    def seed_data(self, table_name: str, data: List[Dict]):
        """Seed test data into a table."""
        self.data_store[table_name] = [dict(row) for row in data]

    def rows(self, table_name: str) -> Dict[str, Dict]:
        key = "d_id" if table_name == "documents" else "e_id"
        return {str(row[key]): row for row in self.data_store.get(table_name, [])}

    def fail(self, table_name: str, operation: str, error: Exception):
        """Make every `operation` ('select' | 'update') on the table raise."""
        self.errors[(table_name, operation)] = error


@pytest.fixture(scope="function")
def mock_supabase() -> MockSupabaseClient:
    """
    Mock Supabase client for testing.

    Stores data in memory and supports select/update with eq, in_,
    order, range and exact counts.
    """
    return MockSupabaseClient()


@pytest.fixture
def supabase_settings() -> SupabaseConfig:
    return SupabaseConfig(url="https://test.supabase.co", key="test-key", page_size=1000)


# ============== Sample Data ==============

@pytest.fixture
def sample_employees() -> List[Dict[str, Any]]:
    return [
        {"e_id": "E1", "e_status": "Active", "e_tdate": None, "e_lhold": False},
        {"e_id": "E2", "e_status": "Terminated", "e_tdate": "2023-01-15", "e_lhold": False},
        {"e_id": "E3", "e_status": "Terminated", "e_tdate": "2010-03-31", "e_lhold": True},
    ]


@pytest.fixture
def sample_documents() -> List[Dict[str, Any]]:
    return [
        {"d_id": "D1", "e_id": "E1", "e_lhold": False, "d_date": "2024-02-01T09:00:00Z",
         "d_r_trigger": "Termination", "d_r_rule": "HR-10", "d_r_month": 12,
         "d_r_deletion": None, "d_r_status": "not set"},
        {"d_id": "D2", "e_id": "E2", "e_lhold": False, "d_date": "2022-11-03T14:00:00Z",
         "d_r_trigger": "Termination", "d_r_rule": "HR-10", "d_r_month": 12,
         "d_r_deletion": None, "d_r_status": "not started"},
        {"d_id": "D3", "e_id": "E2", "e_lhold": False, "d_date": "2024-01-01T08:00:00Z",
         "d_r_trigger": "Cassation Date", "d_r_rule": "PAY-6", "d_r_month": 6,
         "d_r_deletion": None, "d_r_status": "not started"},
        {"d_id": "D4", "e_id": "E3", "e_lhold": True, "d_date": "2009-05-10T10:00:00Z",
         "d_r_trigger": "Termination", "d_r_rule": "HR-10", "d_r_month": 12,
         "d_r_deletion": "2011-03-31", "d_r_status": "expired"},
        {"d_id": "D5", "e_id": "E9", "e_lhold": False, "d_date": "2024-01-01T08:00:00Z",
         "d_r_trigger": "Termination", "d_r_rule": "HR-10", "d_r_month": 12,
         "d_r_deletion": None, "d_r_status": "not set"},
    ]


@pytest.fixture
def local_directory(sample_employees) -> LocalEmployeeDirectory:
    return LocalEmployeeDirectory(sample_employees)


@pytest.fixture
def local_store(sample_documents) -> LocalDocumentStore:
    return LocalDocumentStore(sample_documents)

# src/dossier/core/ports/__init__.py
"""
Port Interfaces for Dependency Inversion

Protocol-based interfaces that the database adapters implement.
"""

from .protocols import (
    MAX_HOLD_BATCH_SIZE,
    DocumentStoreProtocol,
    EmployeeDirectoryProtocol,
)

__all__ = [
    "MAX_HOLD_BATCH_SIZE",
    "DocumentStoreProtocol",
    "EmployeeDirectoryProtocol",
]

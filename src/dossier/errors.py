# src/dossier/errors.py
"""
Error hierarchy for the retention batches.

Read and write failures are fatal to a batch run. Bad data in a document row
is never an error; the resolver maps it to "not started".
"""


class DossierError(Exception):
    """Base class for all dossier errors."""


class ConfigurationError(DossierError):
    """Missing or invalid configuration (credentials, batch sizes, backend)."""


class StoreReadError(DossierError):
    """Loading employees or documents failed. Raised before any write."""


class StoreWriteError(DossierError):
    """
    A hold batch or retention row update failed.

    Writes that completed before the failure are not rolled back.
    """

    def __init__(self, message: str, written: int = 0):
        super().__init__(message)
        self.written = written


class InvalidRetentionRule(DossierError):
    """A document type carries a trigger or month value that cannot be saved."""


__all__ = [
    "DossierError",
    "ConfigurationError",
    "StoreReadError",
    "StoreWriteError",
    "InvalidRetentionRule",
]

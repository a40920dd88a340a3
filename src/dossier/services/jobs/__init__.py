# src/dossier/services/jobs/__init__.py
"""
Batch Jobs Module

Operator-triggered maintenance batches over the document store:
- legal_hold: propagate employee legal hold flags to documents
- retention_status: derive retention status and deletion dates

Run legal_hold first; retention treats held documents as "legal hold".
There is no scheduler and no protection against two concurrent runs.
"""

from .base import JobConfig, JOB_CONFIGS, run_job, run_all_jobs
from .legal_hold import HoldChanges, LegalHoldJob, compute_hold_changes
from .retention_status import RetentionStatusJob, needs_update, plan_retention_updates
from .report import BatchReport, LegalHoldReport, ReportRow, RetentionReport

__all__ = [
    # Configuration
    "JobConfig",
    "JOB_CONFIGS",
    # Job classes
    "LegalHoldJob",
    "RetentionStatusJob",
    # Pure planning
    "HoldChanges",
    "compute_hold_changes",
    "needs_update",
    "plan_retention_updates",
    # Reports
    "BatchReport",
    "LegalHoldReport",
    "ReportRow",
    "RetentionReport",
    # Runner functions
    "run_job",
    "run_all_jobs",
]

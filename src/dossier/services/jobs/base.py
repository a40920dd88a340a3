# src/dossier/services/jobs/base.py
"""
Batch Jobs Base Module

Job configuration and runner functions.
"""

from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Mapping, Optional
import logging

from ...core.container import Container, get_container
from .legal_hold import LegalHoldJob
from .report import BatchReport, LegalHoldReport
from .retention_status import RetentionStatusJob

logger = logging.getLogger(__name__)


@dataclass
class JobConfig:
    """Configuration for a batch job."""
    name: str
    description: str
    schedule: str  # cron expression or "manual"
    enabled: bool = True


# Job configuration registry, in run order
JOB_CONFIGS: Dict[str, JobConfig] = {
    "legal_hold": JobConfig(
        name="Legal Hold Batch",
        description="Sync document legal hold flags with their employee",
        schedule="manual",
        enabled=True,
    ),
    "retention_status": JobConfig(
        name="Retention Batch",
        description="Derive retention status and deletion date for every document",
        schedule="manual",
        enabled=True,
    ),
}


# =============================================================================
# JOB RUNNER FUNCTIONS
# =============================================================================

def run_job(
    job_name: str,
    container: Optional[Container] = None,
    today: Optional[date] = None,
    dry_run: bool = False,
    hold_overrides: Optional[Mapping[str, bool]] = None,
) -> BatchReport:
    """
    Run a specific batch job by name.

    Args:
        job_name: One of 'legal_hold', 'retention_status'
        container: Adapter container (defaults to the global one)
        today: Run date for retention classification
        dry_run: Compute and report without writing
        hold_overrides: Planned document hold flags for retention_status

    Returns:
        The job's report

    Raises:
        ValueError: Unknown job name
        DossierError: Read, write or configuration failure
    """
    if job_name not in JOB_CONFIGS:
        raise ValueError(f"Unknown job: {job_name}. Available: {list(JOB_CONFIGS.keys())}")

    container = container or get_container()

    if job_name == "legal_hold":
        return LegalHoldJob.from_container(container).run(dry_run=dry_run)
    return RetentionStatusJob.from_container(container).run(
        today=today, dry_run=dry_run, hold_overrides=hold_overrides,
    )


def run_all_jobs(
    container: Optional[Container] = None,
    today: Optional[date] = None,
    dry_run: bool = False,
    on_report: Optional[Callable[[BatchReport], None]] = None,
) -> List[BatchReport]:
    """
    Run Legal Hold, then Retention Status.

    Document hold flags feed the retention rules, so order matters.
    A failure in the first job stops the sequence. `on_report` is called
    with each report as soon as its job completes.

    In a dry run nothing is written, so the hold changes Legal Hold planned
    are handed to Retention Status in memory.
    """
    container = container or get_container()
    reports = []
    hold_overrides = None
    for job_name, config in JOB_CONFIGS.items():
        if not config.enabled:
            logger.info(f"Skipping disabled job {job_name}")
            continue
        report = run_job(job_name, container=container, today=today, dry_run=dry_run,
                         hold_overrides=hold_overrides)
        if dry_run and isinstance(report, LegalHoldReport):
            hold_overrides = report.planned_holds()
        if on_report:
            on_report(report)
        reports.append(report)
    return reports


__all__ = [
    "JobConfig",
    "JOB_CONFIGS",
    "run_job",
    "run_all_jobs",
]

# src/dossier/services/jobs/report.py
"""
Batch Reports

The labelled value table an operator sees after a successful batch run.
Reports are only built on the success path; a failed run has no report.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Tuple

from ...core.models import RetentionStatus


def format_time(value: datetime) -> str:
    """HH:MM:SS.mmm"""
    return value.strftime("%H:%M:%S.") + f"{value.microsecond // 1000:03d}"


@dataclass(frozen=True)
class ReportRow:
    label: str
    value: str = ""
    is_blank: bool = False


BLANK = ReportRow("", "", is_blank=True)


@dataclass
class BatchReport:
    """Timing shared by every batch report."""
    job_name: str
    display_name: str
    started_at: datetime
    ended_at: datetime
    dry_run: bool = False

    @property
    def duration_ms(self) -> int:
        return int((self.ended_at - self.started_at).total_seconds() * 1000)

    @property
    def success_message(self) -> str:
        suffix = " (dry run, nothing written)" if self.dry_run else ""
        return f"Successful: {self.display_name} batch finished.{suffix}"

    def metrics(self) -> List[Tuple[str, int]]:
        raise NotImplementedError

    def _metric_rows(self) -> List[ReportRow]:
        raise NotImplementedError

    def rows(self) -> List[ReportRow]:
        """Operator table, top to bottom."""
        return [
            ReportRow("Start time", format_time(self.started_at)),
            BLANK,
            *self._metric_rows(),
            BLANK,
            ReportRow("End time", format_time(self.ended_at)),
            ReportRow("Process duration", f"{self.duration_ms} ms"),
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job": self.job_name,
            "status": "completed",
            "dry_run": self.dry_run,
            "started_at": self.started_at.isoformat(),
            "ended_at": self.ended_at.isoformat(),
            "duration_ms": self.duration_ms,
            "metrics": dict(self.metrics()),
        }


@dataclass
class LegalHoldReport(BatchReport):
    """Counts of the Legal Hold batch. Document counts are taken after the writes."""
    employees_hold_no: int = 0
    employees_hold_yes: int = 0
    employees_total: int = 0
    activated: int = 0
    removed: int = 0
    documents_hold_no: int = 0
    documents_hold_yes: int = 0
    documents_total: int = 0
    # ids flipped (or, in a dry run, planned); not part of the operator table
    activated_ids: List[str] = field(default_factory=list)
    removed_ids: List[str] = field(default_factory=list)

    def planned_holds(self) -> Dict[str, bool]:
        """Document hold flags after this run, keyed by d_id, for the flipped documents."""
        holds = {d_id: True for d_id in self.activated_ids}
        holds.update({d_id: False for d_id in self.removed_ids})
        return holds

    def metrics(self) -> List[Tuple[str, int]]:
        return [
            ("Employees, Legal Hold = no", self.employees_hold_no),
            ("Employees, Legal Hold = yes", self.employees_hold_yes),
            ("Employees, Total", self.employees_total),
            ("Legal Hold activated (Yes) for documents", self.activated),
            ("Legal Hold removed (No) for documents", self.removed),
            ("Documents, Legal Hold = no", self.documents_hold_no),
            ("Documents, Legal Hold = yes", self.documents_hold_yes),
            ("Documents, Total", self.documents_total),
        ]

    def _metric_rows(self) -> List[ReportRow]:
        rows = [ReportRow(label, str(value)) for label, value in self.metrics()]
        # employees / changes / documents
        return rows[0:3] + [BLANK] + rows[3:5] + [BLANK] + rows[5:8]


def empty_status_counts() -> Dict[str, int]:
    return {status.value: 0 for status in RetentionStatus}


@dataclass
class RetentionReport(BatchReport):
    """Counts of the Retention Status batch."""
    total_documents: int = 0
    updated: int = 0
    status_counts: Dict[str, int] = field(default_factory=empty_status_counts)

    def metrics(self) -> List[Tuple[str, int]]:
        metrics = [
            ("Total number of documents", self.total_documents),
            ("Total number of updated retention status", self.updated),
        ]
        for status in RetentionStatus:
            metrics.append((f'Number of documents in status "{status.value}"',
                            self.status_counts.get(status.value, 0)))
        return metrics

    def _metric_rows(self) -> List[ReportRow]:
        rows = [ReportRow(label, str(value)) for label, value in self.metrics()]
        return [rows[0], BLANK, rows[1], BLANK] + rows[2:]

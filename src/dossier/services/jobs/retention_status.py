# src/dossier/services/jobs/retention_status.py
"""
Retention Status Batch

For every document, derives the target retention status and deletion date
and writes only the rows whose stored values differ.

Statuses after a run: not started, started, legal hold, expired.
"not set" never survives a run.

Classification depends on the run date: a document that is "started" today
becomes "expired" on a later run once its deletion date has passed.

Trigger: manual (operator), after the Legal Hold batch.
"""

import logging
from datetime import date, datetime
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ...core.models import Document, Employee, RetentionOutcome, RetentionUpdate
from ...core.ports import DocumentStoreProtocol, EmployeeDirectoryProtocol
from ...errors import StoreWriteError
from ..retention.dates import chunked, normalize, parse_date, to_iso_date
from ..retention.rules import resolve_for_directory
from .report import RetentionReport, empty_status_counts

logger = logging.getLogger(__name__)


def stored_deletion(value) -> str:
    """Stored deletion date as compared by the batch: YYYY-MM-DD or ""."""
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return to_iso_date(parse_date(value))
    return normalize(value)


def needs_update(document: Document, outcome: RetentionOutcome) -> bool:
    """True when the stored status or deletion date differs from the outcome."""
    return (
        normalize(document.d_r_status) != outcome.status.value
        or stored_deletion(document.d_r_deletion) != outcome.deletion_iso
    )


def plan_retention_updates(
    documents: Sequence[Document],
    employees: Mapping[str, Employee],
    today: date,
) -> Tuple[List[RetentionUpdate], Dict[str, int]]:
    """
    Resolve every document and collect the rows that must be written.

    Args:
        documents: All documents
        employees: Employees by e_id
        today: Run date

    Returns:
        (updates, count of documents per final status)
    """
    counts = empty_status_counts()
    updates: List[RetentionUpdate] = []

    for doc in documents:
        if not doc.d_id:
            continue

        outcome = resolve_for_directory(doc, employees, today)
        counts[outcome.status.value] += 1

        if needs_update(doc, outcome):
            updates.append(RetentionUpdate(
                d_id=doc.d_id,
                d_r_status=outcome.status.value,
                d_r_deletion=outcome.deletion_iso or None,
                previous={"d_r_status": doc.d_r_status, "d_r_deletion": doc.d_r_deletion},
            ))

    return updates, counts


class RetentionStatusJob:
    """
    Retention Status Resolver

    Both reads complete before the first write, so a read failure leaves
    the store untouched. A write failure stops the remaining writes; rows
    already written stay written. Rerunning the whole batch is safe.
    """

    JOB_NAME = "retention_status"
    DISPLAY_NAME = "Retention"

    def __init__(
        self,
        employee_directory: EmployeeDirectoryProtocol,
        document_store: DocumentStoreProtocol,
        batch_size: int = 200,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self.directory = employee_directory
        self.store = document_store
        self.batch_size = batch_size

    @classmethod
    def from_container(cls, container) -> "RetentionStatusJob":
        return cls(
            container.employee_directory(),
            container.document_store(),
            batch_size=container.config.batch.retention_batch_size,
        )

    def run(
        self,
        today: Optional[date] = None,
        dry_run: bool = False,
        hold_overrides: Optional[Mapping[str, bool]] = None,
    ) -> RetentionReport:
        """
        Resolve and persist retention state for all documents.

        Args:
            today: Run date (defaults to the local calendar date at start)
            dry_run: Compute and report without writing
            hold_overrides: Document hold flags by d_id that replace the stored
                ones, e.g. the changes a Legal Hold dry run planned but did not write
        """
        started_at = datetime.now()
        today = today or started_at.date()
        logger.info(f"Running Retention batch for {today.isoformat()}{' (dry run)' if dry_run else ''}")

        documents = self.store.list_documents()
        employees = {e.e_id: e for e in self.directory.list_employees()}

        if hold_overrides:
            for doc in documents:
                if doc.d_id in hold_overrides:
                    doc.e_lhold = hold_overrides[doc.d_id]
            logger.debug(f"Applied {len(hold_overrides)} planned legal hold changes")

        updates, counts = plan_retention_updates(documents, employees, today)
        logger.info(f"Retention: {len(updates)} of {len(documents)} documents need an update")

        if not dry_run:
            self._apply(updates)

        report = RetentionReport(
            job_name=self.JOB_NAME,
            display_name=self.DISPLAY_NAME,
            started_at=started_at,
            ended_at=datetime.now(),
            dry_run=dry_run,
            total_documents=len(documents),
            updated=len(updates),
            status_counts=counts,
        )

        logger.info(f"Retention batch finished in {report.duration_ms} ms (updated={len(updates)})")
        return report

    def _apply(self, updates: List[RetentionUpdate]) -> None:
        written = 0
        for batch in chunked(updates, self.batch_size):
            for update in batch:
                try:
                    self.store.update_document_retention(update.d_id, update.d_r_status, update.d_r_deletion)
                except StoreWriteError as e:
                    e.written = written
                    logger.error(f"Retention write failed after {written} documents: {e}")
                    raise
                logger.debug(f"Document {update.d_id}: "
                             f"{update.previous.get('d_r_status')!r}/{update.previous.get('d_r_deletion')!r} -> "
                             f"{update.d_r_status!r}/{update.d_r_deletion!r}")
                written += 1
            logger.debug(f"Retention written: {written}/{len(updates)}")


__all__ = [
    "RetentionStatusJob",
    "needs_update",
    "plan_retention_updates",
    "stored_deletion",
]

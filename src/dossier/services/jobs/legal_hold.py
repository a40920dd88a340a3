# src/dossier/services/jobs/legal_hold.py
"""
Legal Hold Batch

Keeps each document's denormalized `e_lhold` flag in sync with its
employee's current flag:
- document no / employee yes -> activate hold on the document
- document yes / employee no -> remove hold from the document

Documents whose employee is unknown, and null flags on either side, are
left alone. Writes go out in batches of at most 500 ids.

Trigger: manual (operator), run before the Retention Status batch.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from ...core.models import Document, Employee
from ...core.ports import MAX_HOLD_BATCH_SIZE, DocumentStoreProtocol, EmployeeDirectoryProtocol
from ...errors import StoreWriteError
from ..retention.dates import chunked
from .report import LegalHoldReport

logger = logging.getLogger(__name__)


@dataclass
class HoldChanges:
    """Documents whose hold flag disagrees with their employee."""
    activate: List[str] = field(default_factory=list)
    remove: List[str] = field(default_factory=list)


def compute_hold_changes(employees: Sequence[Employee], documents: Sequence[Document]) -> HoldChanges:
    """Split documents into the activate and remove sets."""
    hold_by_employee: Dict[str, Optional[bool]] = {e.e_id: e.e_lhold for e in employees}
    changes = HoldChanges()

    for doc in documents:
        if not doc.e_id or doc.e_id not in hold_by_employee:
            continue
        employee_hold = hold_by_employee[doc.e_id]

        if doc.e_lhold is False and employee_hold is True:
            changes.activate.append(doc.d_id)
        elif doc.e_lhold is True and employee_hold is False:
            changes.remove.append(doc.d_id)

    return changes


class LegalHoldJob:
    """
    Legal Hold Propagator

    Reads all employees and documents, flips the document hold flags that
    disagree with the employee, then recounts documents from the store.
    Any read or write error aborts the run and no report is produced.
    """

    JOB_NAME = "legal_hold"
    DISPLAY_NAME = "Legal Hold"

    def __init__(
        self,
        employee_directory: EmployeeDirectoryProtocol,
        document_store: DocumentStoreProtocol,
        batch_size: int = MAX_HOLD_BATCH_SIZE,
    ):
        if not 1 <= batch_size <= MAX_HOLD_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {MAX_HOLD_BATCH_SIZE}")
        self.directory = employee_directory
        self.store = document_store
        self.batch_size = batch_size

    @classmethod
    def from_container(cls, container) -> "LegalHoldJob":
        return cls(
            container.employee_directory(),
            container.document_store(),
            batch_size=container.config.batch.hold_batch_size,
        )

    def run(self, dry_run: bool = False) -> LegalHoldReport:
        """Propagate employee hold flags to their documents."""
        started_at = datetime.now()
        logger.info(f"Running Legal Hold batch{' (dry run)' if dry_run else ''}")

        employees = self.directory.list_employees()
        documents = self.store.list_documents()

        changes = compute_hold_changes(employees, documents)
        logger.info(f"Legal hold: {len(changes.activate)} to activate, "
                    f"{len(changes.remove)} to remove ({len(documents)} documents)")

        activated = self._apply(changes.activate, True, dry_run)
        removed = self._apply(changes.remove, False, dry_run, already_written=activated)

        report = LegalHoldReport(
            job_name=self.JOB_NAME,
            display_name=self.DISPLAY_NAME,
            started_at=started_at,
            ended_at=started_at,
            dry_run=dry_run,
            employees_hold_no=sum(1 for e in employees if e.e_lhold is False),
            employees_hold_yes=sum(1 for e in employees if e.e_lhold is True),
            employees_total=len(employees),
            activated=activated,
            removed=removed,
            documents_hold_no=self.store.count_documents(e_lhold=False),
            documents_hold_yes=self.store.count_documents(e_lhold=True),
            documents_total=self.store.count_documents(),
            activated_ids=list(changes.activate),
            removed_ids=list(changes.remove),
        )
        report.ended_at = datetime.now()

        logger.info(f"Legal Hold batch finished in {report.duration_ms} ms "
                    f"(activated={activated}, removed={removed})")
        return report

    def _apply(self, ids: List[str], e_lhold: bool, dry_run: bool, already_written: int = 0) -> int:
        """Write one phase; `already_written` counts documents flipped by earlier phases of the run."""
        if dry_run:
            return len(ids)

        written = 0
        for batch in chunked(ids, self.batch_size):
            try:
                self.store.update_document_hold(batch, e_lhold)
            except StoreWriteError as e:
                e.written = already_written + written
                logger.error(f"Legal hold write failed after {e.written} documents: {e}")
                raise
            written += len(batch)
            logger.debug(f"Set e_lhold={e_lhold} on {written}/{len(ids)} documents")
        return written

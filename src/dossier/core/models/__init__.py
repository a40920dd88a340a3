# src/dossier/core/models/__init__.py
"""
Domain models for the retention batches.

These are pure data classes mirroring the `employees` and `documents` rows.
Values are kept as stored; the resolver does its own defensive parsing.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

DateLike = Union[str, date, datetime, None]


def _as_id(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


class RetentionStatus(str, Enum):
    """Lifecycle label of a document's deletion eligibility."""
    NOT_SET = "not set"
    NOT_STARTED = "not started"
    STARTED = "started"
    LEGAL_HOLD = "legal hold"
    EXPIRED = "expired"


class TriggerKind(str, Enum):
    """Event that starts a document's retention countdown."""
    TERMINATION = "Termination"
    CASSATION_DATE = "Cassation Date"
    UNKNOWN = "Unknown"


@dataclass
class Employee:
    """Employee entity (read-only to the batches)."""
    e_id: str
    e_status: Optional[str] = None
    e_tdate: DateLike = None
    e_lhold: Optional[bool] = None

    @property
    def is_terminated(self) -> bool:
        return (self.e_status or "").strip().lower() == "terminated"

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Employee":
        return cls(
            e_id=_as_id(row.get("e_id")) or "",
            e_status=row.get("e_status"),
            e_tdate=row.get("e_tdate"),
            e_lhold=row.get("e_lhold"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)


@dataclass
class Document:
    """Document entity with its denormalized hold flag and retention fields."""
    d_id: str
    e_id: Optional[str] = None
    e_lhold: Optional[bool] = None
    d_date: DateLike = None
    d_r_taxcode: Optional[str] = None
    d_r_trigger: Optional[str] = None
    d_r_rule: Optional[str] = None
    d_r_month: Any = None
    d_r_deletion: DateLike = None
    d_r_status: Optional[str] = RetentionStatus.NOT_STARTED.value

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Document":
        return cls(
            d_id=_as_id(row.get("d_id")) or "",
            e_id=_as_id(row.get("e_id")),
            e_lhold=row.get("e_lhold"),
            d_date=row.get("d_date"),
            d_r_taxcode=row.get("d_r_taxcode"),
            d_r_trigger=row.get("d_r_trigger"),
            d_r_rule=row.get("d_r_rule"),
            d_r_month=row.get("d_r_month"),
            d_r_deletion=row.get("d_r_deletion"),
            d_r_status=row.get("d_r_status"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)


@dataclass(frozen=True)
class RetentionOutcome:
    """Target retention state computed for one document."""
    status: RetentionStatus
    deletion: Optional[date] = None

    @property
    def deletion_iso(self) -> str:
        """Deletion date as YYYY-MM-DD, or "" when there is none."""
        return self.deletion.isoformat() if self.deletion else ""


@dataclass
class RetentionUpdate:
    """A queued write for one document whose stored state differs."""
    d_id: str
    d_r_status: str
    d_r_deletion: Optional[str] = None
    previous: Dict[str, Any] = field(default_factory=dict)


__all__ = [
    "DateLike",
    "RetentionStatus",
    "TriggerKind",
    "Employee",
    "Document",
    "RetentionOutcome",
    "RetentionUpdate",
]

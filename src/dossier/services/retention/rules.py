# src/dossier/services/retention/rules.py
"""
Retention rule engine.

Derives the target (status, deletion date) of a document from its hold flag,
its retention trigger and month offset, and the employee's termination state.
The result is computed fresh on every run; `today` is always passed in.

Rule order:
1. Document on legal hold -> "legal hold", no deletion date
2. Trigger empty or month offset invalid -> "not started"
3. Termination -> clock starts at the employee's termination date
4. Cassation Date -> clock starts at the document's creation date
5. Any other trigger -> "not started"
"""

import logging
from datetime import date
from typing import Any, Dict, Mapping, Optional

from ...core.models import (
    Document,
    Employee,
    RetentionOutcome,
    RetentionStatus,
    TriggerKind,
)
from ...errors import InvalidRetentionRule
from .dates import add_calendar_months, is_expired, normalize, parse_date, parse_months

logger = logging.getLogger(__name__)

_TRIGGERS = {
    "termination": TriggerKind.TERMINATION,
    "cassation date": TriggerKind.CASSATION_DATE,
}

NOT_STARTED = RetentionOutcome(RetentionStatus.NOT_STARTED)
LEGAL_HOLD = RetentionOutcome(RetentionStatus.LEGAL_HOLD)


def classify_trigger(value: Any) -> Optional[TriggerKind]:
    """Map a stored trigger to its kind; None when the trigger is empty."""
    key = normalize(value).lower()
    if not key:
        return None
    return _TRIGGERS.get(key, TriggerKind.UNKNOWN)


def _countdown(base: Optional[date], months: int, today: date) -> RetentionOutcome:
    if base is None:
        return NOT_STARTED
    try:
        deletion = add_calendar_months(base, months)
    except (ValueError, OverflowError):
        logger.warning(f"Deletion date out of range: {base} + {months} months")
        return NOT_STARTED

    status = RetentionStatus.EXPIRED if is_expired(deletion, today) else RetentionStatus.STARTED
    return RetentionOutcome(status, deletion)


def resolve_retention(
    document: Document,
    employee: Optional[Employee],
    today: date,
) -> RetentionOutcome:
    """
    Compute the retention outcome for one document.

    Args:
        document: The document row
        employee: The document's employee, or None when unmatched
        today: Calendar date the batch runs for

    Returns:
        Target status and deletion date. Never "not set".
    """
    if document.e_lhold:
        return LEGAL_HOLD

    trigger = classify_trigger(document.d_r_trigger)
    months = parse_months(document.d_r_month)

    if trigger is None or months is None:
        return NOT_STARTED

    if trigger is TriggerKind.TERMINATION:
        if employee is None or not employee.is_terminated:
            return NOT_STARTED
        return _countdown(parse_date(employee.e_tdate), months, today)

    if trigger is TriggerKind.CASSATION_DATE:
        return _countdown(parse_date(document.d_date), months, today)

    return NOT_STARTED


def resolve_for_directory(
    document: Document,
    employees: Mapping[str, Employee],
    today: date,
) -> RetentionOutcome:
    """Resolve a document, looking its employee up by e_id."""
    employee = employees.get(document.e_id) if document.e_id else None
    return resolve_retention(document, employee, today)


# =============================================================================
# DOCUMENT TYPE RULES
# =============================================================================

def validate_retention_rule(trigger: Any, month: Any) -> Dict[str, Any]:
    """
    Check the retention rule of a document type before it is saved.

    Args:
        trigger: "Termination", "Cassation Date" or empty (any case)
        month: Empty or a non-negative whole number

    Returns:
        {"d_r_trigger": canonical trigger or None, "d_r_month": int or None}

    Raises:
        InvalidRetentionRule: On an unknown trigger or a bad month value
    """
    kind = classify_trigger(trigger)
    if kind is TriggerKind.UNKNOWN:
        raise InvalidRetentionRule(
            f'Invalid Trigger "{normalize(trigger)}". Allowed: Termination, Cassation Date (or empty).'
        )

    month_text = normalize(month)
    if not month_text:
        month_value = None
    else:
        try:
            month_value = int(month_text)
        except ValueError:
            raise InvalidRetentionRule(f'Invalid Month "{month_text}". Expected a whole number.')
        if month_value < 0:
            raise InvalidRetentionRule("Month must be >= 0.")

    return {
        "d_r_trigger": kind.value if kind else None,
        "d_r_month": month_value,
    }


def stamp_retention_fields(
    doc_type: Mapping[str, Any],
    employee: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Retention fields a newly ingested document starts with.

    The rule is copied from the document type at creation time; the batches
    fill in status and deletion date later.
    """
    return {
        "e_lhold": bool((employee or {}).get("e_lhold")),
        "d_r_taxcode": doc_type.get("d_r_taxcode") or "",
        "d_r_rule": doc_type.get("d_r_rule") or "",
        "d_r_trigger": doc_type.get("d_r_trigger") or "",
        "d_r_month": parse_months(doc_type.get("d_r_month")) or 0,
        "d_r_deletion": None,
        "d_r_status": RetentionStatus.NOT_STARTED.value,
    }


__all__ = [
    "classify_trigger",
    "resolve_retention",
    "resolve_for_directory",
    "validate_retention_rule",
    "stamp_retention_fields",
]

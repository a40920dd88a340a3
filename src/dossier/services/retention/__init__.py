# src/dossier/services/retention/__init__.py
"""
Retention Engine

Pure rule evaluation and date arithmetic, free of any store access.
"""

from .dates import (
    add_calendar_months,
    chunked,
    is_expired,
    normalize,
    parse_date,
    parse_months,
    to_iso_date,
)
from .rules import (
    classify_trigger,
    resolve_for_directory,
    resolve_retention,
    stamp_retention_fields,
    validate_retention_rule,
)

__all__ = [
    "add_calendar_months",
    "chunked",
    "is_expired",
    "normalize",
    "parse_date",
    "parse_months",
    "to_iso_date",
    "classify_trigger",
    "resolve_for_directory",
    "resolve_retention",
    "stamp_retention_fields",
    "validate_retention_rule",
]

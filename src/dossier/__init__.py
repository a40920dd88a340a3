# src/dossier/__init__.py
"""
Dossier retention and legal hold batches.

Derives document retention status and deletion dates and keeps document
legal hold flags in sync with employees, against a Supabase backend.
"""

__version__ = "0.1.0"

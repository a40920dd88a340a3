# src/dossier/services/__init__.py
"""
Services: the retention engine and the batch jobs built on it.
"""

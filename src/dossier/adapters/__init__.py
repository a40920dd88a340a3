# src/dossier/adapters/__init__.py
"""
Adapters implementing the core ports.
"""

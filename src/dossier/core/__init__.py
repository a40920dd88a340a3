# src/dossier/core/__init__.py
"""
Core layer: domain models, ports and the dependency container.
"""

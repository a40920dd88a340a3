# tests/unit/__init__.py
"""
Unit tests for the dossier retention batches.

Unit tests exercise the rule engine, jobs and adapters in isolation, using
the in-memory store and a mocked Supabase client.
"""

"""Database Layer — SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - Engines and sessions are created by infrastructure/database.py, never here
"""

"""Infrastructure Layer — database access, repositories, and cross-cutting concerns.

Invariants:
    - Repositories implement the Protocols in core/repository_protocols.py
    - All SQLAlchemy failures surface as core DatabaseError, never raw driver errors

Design Decisions:
    - Repositories take an AsyncSession and never commit: the caller owns the transaction
"""

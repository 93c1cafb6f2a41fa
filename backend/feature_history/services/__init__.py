"""Services Layer — orchestrates core snapshot logic around repository IO.

Invariants:
    - Services never commit: the caller owns the transaction
    - Errors from core propagate unchanged after being logged

Design Decisions:
    - One class per responsibility: resolver, builder, history service
"""

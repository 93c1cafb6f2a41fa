"""Pydantic Schemas — JSON shapes of versions as persisted and as handed to callers.

Invariants:
    - Schemas validate at system boundary (JSON columns, exported documents)
    - Frozen domain dataclasses from core/ are the in-memory form; schemas only translate

Design Decisions:
    - Separate from models: schemas are serialization contracts, models are persistence
"""

"""Repositories - SQLAlchemy implementations of core/repository_protocols.py.

Invariants:
    - One class per entity table, constructed with the request's AsyncSession
    - Repositories flush but never commit: the calling handler owns the transaction
    - Reads select columns into frozen snapshots, never hand out live ORM objects
"""

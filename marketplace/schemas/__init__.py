"""Pydantic Schemas - request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies, API responses)
    - Responses are built from core snapshots, never from ORM objects
"""

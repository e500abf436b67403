"""API Layer - FastAPI routes, bearer-token dependency, and error handlers.

Invariants:
    - Routes registered explicitly in main.py
    - All endpoints return JSON, except item images which are returned as raw bytes
"""

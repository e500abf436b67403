"""Services Layer - request handlers that sequence core checks around repository IO.

Invariants:
    - One handler class per resource, constructed with the request's AsyncSession
    - Every mutating operation runs inside a single atomic() transaction
"""

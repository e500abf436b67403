"""Marketplace Backend - accounts, listings, purchases and favorite folders over REST.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

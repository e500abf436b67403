"""Infrastructure Layer - database sessions, credentials, session tokens, logging.

Invariants:
    - Infrastructure never imports domain rules from core/ (errors and snapshot types only)
    - Every library failure is mapped to a MarketplaceError before it leaves this layer
"""

"""Infrastructure Layer — database access, store adapters and cross-cutting concerns.

Invariants:
    - Adapters implement core Protocols; core never imports from here
    - All database calls wrapped with timeout/error mapping

Design Decisions:
    - One adapter per storage engine (ADR: single responsibility)
"""

"""Services Layer — use-case orchestration over core Protocols.

Invariants:
    - Services depend on Protocols (core/repository_protocols.py), never on adapters
    - Services return schemas (read views), never ORM rows or mutable entities
"""

"""Database Definitions — declarative Base and custom column types.

Invariants:
    - Single async engine per process (initialized via init_db)
    - Column types here know about SQLAlchemy, never about sessions or engines

Design Decisions:
    - asyncpg driver for PostgreSQL (ADR: native async, no thread pool overhead)
"""

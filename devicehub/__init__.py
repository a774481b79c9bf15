"""DeviceHub — device registry service (Device aggregate over PostgreSQL/JSONB).

Invariants:
    - Package root contains no executable code besides the version constant

Design Decisions:
    - Explicit imports only, no star exports
"""

__version__ = "1.0.0"

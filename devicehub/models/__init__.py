"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - DeviceRecord is the only table; the Device aggregate maps onto exactly one row

Design Decisions:
    - Models imported here so Base.metadata is complete before create_all runs
"""

from devicehub.models.device import DeviceRecord  # noqa: F401

"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - DeviceId wraps UUID — never use bare UUID in service signatures
    - HardwareId is the business key (MAC address, serial number, ...)
    - ABSENT is the explicit "field not supplied" marker; empty values ("" and {}) are
      real values that replace

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Single-member Enum for ABSENT: a typed sentinel that type checkers can narrow
      with `is ABSENT`, unlike object()
"""

from enum import Enum
from typing import NewType, TypeVar, Union
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

DeviceId = NewType("DeviceId", UUID)
HardwareId = NewType("HardwareId", str)


# ─── Tri-state fields ────────────────────────────────────────────

class Absent(Enum):
    """Marks an optional update field the caller did not supply."""
    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = Absent.ABSENT

T = TypeVar("T")
Maybe = Union[T, Absent]


def is_present(value: object) -> bool:
    """True when an update field was supplied.

    None also counts as not supplied: no mutable Device field is nullable.
    """
    return value is not ABSENT and value is not None

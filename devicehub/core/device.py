"""Device Entity — the aggregate root and its construction invariants.

Invariants:
    - hardware_id is non-empty at construction (HardwareIdEmptyError otherwise)
    - metadata is never None after construction; the caller's dict is copied, not aliased
    - id, created_at, updated_at stay None until the store persists the entity

Design Decisions:
    - Plain dataclass, not the ORM row: core stays free of SQLAlchemy (ADR: functional core)
    - Construction through new_device(): the dataclass itself stays a dumb record the
      store can rebuild from rows without re-running input validation
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from devicehub.core.errors import HardwareIdEmptyError


@dataclass
class Device:
    """Device aggregate — pure dataclass, no IO."""

    hardware_id: str
    name: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    # Assigned by the store
    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


def new_device(
    hardware_id: str,
    name: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Device:
    """Build a validated, unsaved Device."""
    if not hardware_id:
        raise HardwareIdEmptyError()
    return Device(
        hardware_id=hardware_id,
        name=name if name is not None else "",
        metadata=dict(metadata) if metadata is not None else {},
    )

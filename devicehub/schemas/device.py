"""Device Schemas — Pydantic models for the device API boundary.

Invariants:
    - JSON field names are camelCase (hardwareId, createdAt, updatedAt); Python names snake_case
    - DeviceView is frozen and holds a copy of metadata, never the entity's dict
    - DeviceUpdate forbids unknown fields: hardwareId cannot be changed after creation
    - An omitted or null update field means "leave unchanged" (ABSENT)

Design Decisions:
    - hardwareId emptiness NOT checked here: the entity constructor owns that rule so
      non-HTTP callers get the same HardwareIdEmptyError (ADR: single source of truth)
    - to_update_fields() is the only place that maps JSON presence onto the tri-state
"""

import copy
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from devicehub.core.device import Device
from devicehub.core.domain_types import ABSENT


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeviceCreate(_CamelModel):
    """Device registration request."""
    hardware_id: str
    name: str | None = None
    metadata: dict[str, Any] | None = None


class DeviceUpdate(_CamelModel):
    """Partial update — only name and metadata are mutable."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid",
    )

    name: str | None = None
    metadata: dict[str, Any] | None = None

    def to_update_fields(self) -> dict[str, Any]:
        """Map each field onto its value, or ABSENT when omitted/null."""
        return {
            "name": self.name if self.name is not None else ABSENT,
            "metadata": self.metadata if self.metadata is not None else ABSENT,
        }


class DeviceView(_CamelModel):
    """Read-only projection of a Device returned to callers."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True,
    )

    id: UUID
    hardware_id: str
    name: str
    metadata: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, device: Device) -> "DeviceView":
        return cls(
            id=device.id,
            hardware_id=device.hardware_id,
            name=device.name,
            metadata=copy.deepcopy(device.metadata),
            created_at=device.created_at,
            updated_at=device.updated_at,
        )


"""Device Service — orchestrates entity construction, merge-on-update and existence checks.

Invariants:
    - Depends only on the DeviceStore Protocol, never on a concrete adapter
    - Store NotFoundError is always normalized to DeviceNotFoundError
    - update_device applies a field-presence merge: ABSENT leaves a field untouched,
      any supplied value replaces it wholesale (metadata is NOT merged key-by-key)
    - hardware_id is immutable after creation (not an update parameter)
    - delete_device checks existence first, so deleting a missing id raises
      DeviceNotFoundError whatever the store's own delete policy is
    - Callers only ever receive DeviceView, never the mutable entity

Design Decisions:
    - No locking: update is read-modify-write, last write wins at the row level
    - No retries: StoreError propagates for the caller to decide
"""

import logging
from typing import Any

from devicehub.core.device import Device, new_device
from devicehub.core.domain_types import (
    ABSENT, DeviceId, HardwareId, Maybe, is_present,
)
from devicehub.core.errors import DeviceNotFoundError, NotFoundError
from devicehub.core.repository_protocols import DeviceStore
from devicehub.schemas.device import DeviceView

logger = logging.getLogger(__name__)


class DeviceService:
    """Device use cases over an injected DeviceStore."""

    def __init__(self, store: DeviceStore):
        self.store = store

    async def create_device(
        self,
        hardware_id: str,
        name: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> DeviceView:
        device = new_device(hardware_id, name, metadata)
        await self.store.save(device)
        return DeviceView.from_entity(device)

    async def get_device(self, device_id: DeviceId) -> DeviceView:
        device = await self._get_or_raise(device_id)
        return DeviceView.from_entity(device)

    async def get_device_by_hardware_id(self, hardware_id: HardwareId) -> DeviceView:
        try:
            device = await self.store.find_by_hardware_id(hardware_id)
        except NotFoundError as e:
            raise DeviceNotFoundError(hardware_id, e.context) from e
        return DeviceView.from_entity(device)

    async def list_devices(self) -> list[DeviceView]:
        devices = await self.store.find_all()
        return [DeviceView.from_entity(d) for d in devices or []]

    async def update_device(
        self,
        device_id: DeviceId,
        name: Maybe[str] = ABSENT,
        metadata: Maybe[dict[str, Any]] = ABSENT,
    ) -> DeviceView:
        """Fetch, merge supplied fields, persist."""
        device = await self._get_or_raise(device_id)
        apply_update(device, name=name, metadata=metadata)
        try:
            await self.store.save(device)
        except NotFoundError as e:
            # deleted between lookup and save
            raise DeviceNotFoundError(str(device_id), e.context) from e
        return DeviceView.from_entity(device)

    async def delete_device(self, device_id: DeviceId) -> None:
        await self._get_or_raise(device_id)
        try:
            await self.store.delete(device_id)
        except NotFoundError as e:
            raise DeviceNotFoundError(str(device_id), e.context) from e

    async def _get_or_raise(self, device_id: DeviceId) -> Device:
        try:
            return await self.store.find_by_id(device_id)
        except NotFoundError as e:
            logger.info(
                f"Device {device_id} not found",
                extra={"device_id": str(device_id), "operation": "find_by_id"},
            )
            raise DeviceNotFoundError(str(device_id), e.context) from e


def apply_update(
    device: Device,
    name: Maybe[str] = ABSENT,
    metadata: Maybe[dict[str, Any]] = ABSENT,
) -> Device:
    """Field-presence merge — pure, mutates and returns the entity."""
    if is_present(name):
        device.name = name
    if is_present(metadata):
        device.metadata = dict(metadata)
    return device

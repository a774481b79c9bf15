"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy; test fakes
      satisfy it without importing anything from infrastructure/
    - Async in Protocol: boundary methods are async because implementations do IO;
      asyncio task cancellation is the request-scoped cancellation signal
"""

from typing import Protocol

from devicehub.core.device import Device
from devicehub.core.domain_types import DeviceId, HardwareId


class DeviceStore(Protocol):
    """Contract for Device persistence — implemented by shell.

    save() upserts and writes id/created_at/updated_at back into the passed entity.
    find_* raise NotFoundError when no row matches; delete() of a missing id
    raises NotFoundError as well. Uniqueness violations raise ConflictError,
    every other failure StoreError.
    """
    async def save(self, device: Device) -> None: ...
    async def find_by_id(self, device_id: DeviceId) -> Device: ...
    async def find_by_hardware_id(self, hardware_id: HardwareId) -> Device: ...
    async def find_all(self) -> list[Device]: ...
    async def delete(self, device_id: DeviceId) -> None: ...

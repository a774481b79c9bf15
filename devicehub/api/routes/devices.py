"""Device Routes — HTTP mapping of the DeviceService operations.

Invariants:
    - One DeviceService (and one SqlAlchemyDeviceStore) per request, bound to the
      request's AsyncSession
    - Errors are raised, never rendered here: error_handlers maps DeviceHubError
      subclasses to their http_status
    - Malformed UUID path params and unknown body fields are rejected with 400
    - GET /devices always returns a JSON array, never null

Design Decisions:
    - PUT keeps partial-update semantics: omitted or null fields are left unchanged
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from devicehub.config import get_settings
from devicehub.core.domain_types import DeviceId, HardwareId
from devicehub.infrastructure.database import get_db
from devicehub.infrastructure.device_store import SqlAlchemyDeviceStore
from devicehub.schemas.device import DeviceCreate, DeviceUpdate, DeviceView
from devicehub.services.device_service import DeviceService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/devices", tags=["devices"])


def get_device_service(db: AsyncSession = Depends(get_db)) -> DeviceService:
    store = SqlAlchemyDeviceStore(
        db, timeout_seconds=get_settings().store_timeout_seconds,
    )
    return DeviceService(store)


@router.post(
    "", response_model=DeviceView,
    status_code=status.HTTP_201_CREATED,
)
async def create_device(
    body: DeviceCreate, service: DeviceService = Depends(get_device_service),
):
    """Register a new device."""
    return await service.create_device(
        body.hardware_id, body.name, body.metadata,
    )


@router.get("", response_model=list[DeviceView])
async def list_devices(service: DeviceService = Depends(get_device_service)):
    """List all devices."""
    return await service.list_devices()


@router.get("/hardware/{hardware_id}", response_model=DeviceView)
async def get_device_by_hardware_id(
    hardware_id: str, service: DeviceService = Depends(get_device_service),
):
    """Look a device up by its hardware id."""
    return await service.get_device_by_hardware_id(HardwareId(hardware_id))


@router.get("/{device_id}", response_model=DeviceView)
async def get_device(
    device_id: UUID, service: DeviceService = Depends(get_device_service),
):
    """Get device details."""
    return await service.get_device(DeviceId(device_id))


@router.put("/{device_id}", response_model=DeviceView)
async def update_device(
    device_id: UUID,
    body: DeviceUpdate,
    service: DeviceService = Depends(get_device_service),
):
    """Update name and/or metadata. Metadata is replaced, not merged."""
    return await service.update_device(
        DeviceId(device_id), **body.to_update_fields(),
    )


@router.delete("/{device_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_device(
    device_id: UUID, service: DeviceService = Depends(get_device_service),
):
    """Delete a device."""
    await service.delete_device(DeviceId(device_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

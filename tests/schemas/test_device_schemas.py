"""Device Schemas — camelCase aliases, immutable hardwareId, tri-state update fields.

Invariants:
    - Request models accept camelCase JSON and snake_case Python names
    - DeviceUpdate forbids hardwareId and any other unknown field
    - Omitted or null update fields map to ABSENT; empty values are kept
    - DeviceView dumps camelCase and copies metadata out of the entity
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from devicehub.core.device import Device
from devicehub.core.domain_types import ABSENT
from devicehub.schemas.device import DeviceCreate, DeviceUpdate, DeviceView


# --- DeviceCreate -------------------------------------------------------------

def test_create_accepts_camel_case():
    body = DeviceCreate.model_validate({"hardwareId": "hw-1", "name": "sensor"})
    assert body.hardware_id == "hw-1"
    assert body.name == "sensor"
    assert body.metadata is None


def test_create_accepts_snake_case():
    assert DeviceCreate(hardware_id="hw-1").hardware_id == "hw-1"


def test_create_requires_hardware_id():
    with pytest.raises(ValidationError):
        DeviceCreate.model_validate({"name": "sensor"})


def test_create_leaves_empty_hardware_id_to_the_entity():
    assert DeviceCreate.model_validate({"hardwareId": ""}).hardware_id == ""


# --- DeviceUpdate -------------------------------------------------------------

def test_update_rejects_hardware_id():
    with pytest.raises(ValidationError):
        DeviceUpdate.model_validate({"hardwareId": "hw-2"})


def test_update_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        DeviceUpdate.model_validate({"colour": "red"})


def test_update_omitted_fields_are_absent():
    assert DeviceUpdate.model_validate({}).to_update_fields() == {
        "name": ABSENT, "metadata": ABSENT,
    }


def test_update_null_fields_are_absent():
    fields = DeviceUpdate.model_validate(
        {"name": None, "metadata": None},
    ).to_update_fields()
    assert fields == {"name": ABSENT, "metadata": ABSENT}


def test_update_empty_values_are_present():
    fields = DeviceUpdate.model_validate(
        {"name": "", "metadata": {}},
    ).to_update_fields()
    assert fields == {"name": "", "metadata": {}}


# --- DeviceView ---------------------------------------------------------------

def _persisted_device() -> Device:
    now = datetime.now(timezone.utc)
    return Device(
        id=uuid4(), hardware_id="hw-1", name="sensor",
        metadata={"zone": "A"}, created_at=now, updated_at=now,
    )


def test_view_dumps_camel_case():
    dumped = DeviceView.from_entity(_persisted_device()).model_dump(
        mode="json", by_alias=True,
    )
    assert set(dumped) == {
        "id", "hardwareId", "name", "metadata", "createdAt", "updatedAt",
    }


def test_view_requires_persisted_entity():
    device = _persisted_device()
    device.id = None
    with pytest.raises(ValidationError):
        DeviceView.from_entity(device)

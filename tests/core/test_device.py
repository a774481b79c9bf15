"""Device Entity — verifies construction invariants of new_device.

Tests:
    - hardware_id must be non-empty, whatever the other arguments
    - name defaults to "", metadata to a fresh non-None {}
    - supplied metadata is copied, not aliased
    - no identifier or timestamps before persistence
"""

import pytest

from devicehub.core.device import Device, new_device
from devicehub.core.errors import HardwareIdEmptyError, ValidationError


def test_new_device_sets_hardware_id():
    device = new_device("hw-1")
    assert device.hardware_id == "hw-1"


def test_new_device_defaults_name_and_metadata():
    device = new_device("hw-1")
    assert device.name == ""
    assert device.metadata == {}
    assert device.metadata is not None


def test_new_device_metadata_defaults_are_not_shared():
    a = new_device("hw-1")
    b = new_device("hw-2")
    a.metadata["zone"] = "A"
    assert b.metadata == {}


@pytest.mark.parametrize("name,metadata", [
    (None, None),
    ("sensor", None),
    (None, {"zone": "A"}),
    ("sensor", {"zone": "A"}),
])
def test_empty_hardware_id_always_fails(name, metadata):
    with pytest.raises(HardwareIdEmptyError) as exc_info:
        new_device("", name, metadata)
    assert isinstance(exc_info.value, ValidationError)
    assert exc_info.value.field == "hardware_id"
    assert exc_info.value.message == "hardware id cannot be empty"
    assert exc_info.value.http_status == 400


def test_new_device_copies_metadata():
    source = {"zone": "A"}
    device = new_device("hw-1", metadata=source)
    source["zone"] = "B"
    source["extra"] = True
    assert device.metadata == {"zone": "A"}


def test_new_device_keeps_supplied_name():
    assert new_device("hw-1", "sensor").name == "sensor"


def test_new_device_is_not_persisted():
    device = new_device("hw-1", "sensor", {"zone": "A"})
    assert device.id is None
    assert device.created_at is None
    assert device.updated_at is None
    assert device.is_persisted is False


def test_whitespace_hardware_id_is_accepted():
    assert new_device(" ").hardware_id == " "


def test_dataclass_defaults_match_constructor():
    assert Device(hardware_id="hw-1") == new_device("hw-1")

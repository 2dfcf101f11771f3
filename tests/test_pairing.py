"""Tests for the pairing device listing."""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING

import pytest

from melcloud_optimizer.exceptions import AuthenticationError, MelCloudApiError
from melcloud_optimizer.models import Device, PairableDevice
from melcloud_optimizer.pairing import list_pairable_devices, to_pairable_device
from melcloud_optimizer.settings import MappingSettings


if TYPE_CHECKING:
    from melcloud_optimizer.client import MelCloudClient
    from tests.conftest import FakeMelCloud


CREDENTIALS = {"melcloud_user": "test@example.com", "melcloud_pass": "password"}


class TestToPairableDevice:
    """Test to_pairable_device()."""

    def test_mapping(self) -> None:
        """Test the device is described for the pairing list."""
        device = to_pairable_device(Device(id="456", name="Test Device", building_id=123))

        assert device == PairableDevice(
            name="Test Device (Boiler)",
            data={"id": "melcloud_boiler_456", "deviceId": "456", "buildingId": 123},
            store={
                "melcloud_device_id": "456",
                "melcloud_building_id": 123,
                "device_name": "Test Device",
            },
            settings={"device_id": "456", "building_id": 123},
        )


class TestListPairableDevices:
    """Test list_pairable_devices()."""

    async def test_lists_devices(self, client: MelCloudClient, fake_melcloud: FakeMelCloud) -> None:
        """Test login then enumeration with the configured credentials."""
        devices = await list_pairable_devices(client, MappingSettings(CREDENTIALS))

        assert [d.name for d in devices] == ["Test Device (Boiler)"]
        assert fake_melcloud.paths == ["/Login/ClientLogin", "/User/ListDevices"]
        assert fake_melcloud.requests[0].body["Email"] == "test@example.com"

    @pytest.mark.parametrize("settings", [{}, {"melcloud_user": "test@example.com"}, {"melcloud_pass": "x"}])
    async def test_missing_credentials(
        self, client: MelCloudClient, fake_melcloud: FakeMelCloud, settings: dict[str, str]
    ) -> None:
        """Test nothing is requested without credentials."""
        with pytest.raises(AuthenticationError, match="MELCloud credentials not configured"):
            await list_pairable_devices(client, MappingSettings(settings))

        assert fake_melcloud.requests == []

    async def test_login_failure_aborts(self, client: MelCloudClient, fake_melcloud: FakeMelCloud) -> None:
        """Test a rejected login stops before device listing."""
        fake_melcloud.login_response = {"ErrorId": 1, "ErrorMessage": "Invalid credentials"}

        with pytest.raises(MelCloudApiError, match="MELCloud login failed"):
            await list_pairable_devices(client, MappingSettings(CREDENTIALS))

        assert fake_melcloud.paths == ["/Login/ClientLogin"]

    async def test_listing_failure(self, client: MelCloudClient, fake_melcloud: FakeMelCloud) -> None:
        """Test enumeration errors propagate."""
        fake_melcloud.failures["/User/ListDevices"] = HTTPStatus.INTERNAL_SERVER_ERROR

        with pytest.raises(MelCloudApiError, match="API error: 500 Internal Server Error"):
            await list_pairable_devices(client, MappingSettings(CREDENTIALS))

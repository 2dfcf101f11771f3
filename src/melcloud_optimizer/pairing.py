"""Device listing for the host platform's pairing flow.

Credentials come from the injected settings reader; there is no global
settings handle.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from melcloud_optimizer.const import (
    PAIRING_ID_PREFIX,
    PAIRING_NAME_SUFFIX,
    SETTING_PASSWORD,
    SETTING_USER,
)
from melcloud_optimizer.exceptions import ErrorCategory
from melcloud_optimizer.models import PairableDevice


if TYPE_CHECKING:
    from melcloud_optimizer.client import MelCloudClient
    from melcloud_optimizer.models import Device
    from melcloud_optimizer.settings import SettingsReader

_LOGGER = logging.getLogger(__name__)

CREDENTIALS_MISSING_MESSAGE = (
    "MELCloud credentials not configured. Please configure them in the app settings first."
)


def to_pairable_device(device: Device) -> PairableDevice:
    """Describe a MELCloud device for the pairing list."""
    device_id = str(device.id)
    building_id = int(device.building_id)
    return PairableDevice(
        name=f"{device.name} {PAIRING_NAME_SUFFIX}",
        data={
            "id": f"{PAIRING_ID_PREFIX}{device_id}",
            "deviceId": device_id,
            "buildingId": building_id,
        },
        store={
            "melcloud_device_id": device_id,
            "melcloud_building_id": building_id,
            "device_name": device.name,
        },
        settings={
            "device_id": device_id,
            "building_id": building_id,
        },
    )


async def list_pairable_devices(client: MelCloudClient, settings: SettingsReader) -> list[PairableDevice]:
    """Log in with the configured account and list its devices for pairing.

    Args:
        client: Client to log in and enumerate devices with.
        settings: Settings holding the account credentials.

    Returns:
        One PairableDevice per device on the account.

    Raises:
        AuthenticationError: If the credentials are not configured.
        MelCloudError: If login or enumeration fails.
    """
    email = settings.get(SETTING_USER)
    password = settings.get(SETTING_PASSWORD)

    if not email or not password:
        handler = client.api.error_handler
        error = handler.create_app_error(ErrorCategory.AUTH, CREDENTIALS_MISSING_MESSAGE)
        handler.log_error(error)
        raise error

    _LOGGER.info("Fetching MELCloud devices for pairing")

    await client.login(email, password)
    devices = await client.get_devices()

    _LOGGER.info("Found %d MELCloud device(s)", len(devices))
    return [to_pairable_device(device) for device in devices]

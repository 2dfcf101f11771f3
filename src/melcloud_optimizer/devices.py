"""Device state read and write for the MELCloud API.

The state mutation endpoint takes the full device document, not a patch.
Writes therefore fetch the current state first, change the temperature
fields locally and post the whole document back.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from melcloud_optimizer.const import (
    EFFECTIVE_FLAG_SET_TEMPERATURE,
    ENDPOINT_DEVICE_GET,
    ENDPOINT_DEVICE_SET_ATA,
    FIELD_EFFECTIVE_FLAGS,
    FIELD_HAS_PENDING_COMMAND,
    FIELD_SET_TEMPERATURE,
    FIELD_SET_TEMPERATURE_ZONE1,
)
from melcloud_optimizer.exceptions import ErrorCategory


if TYPE_CHECKING:
    from melcloud_optimizer.api import MelCloudAPI
    from melcloud_optimizer.auth import AuthSession
    from melcloud_optimizer.models import DeviceState

_LOGGER = logging.getLogger(__name__)


def build_temperature_payload(state: DeviceState, target_temperature: float) -> dict[str, Any]:
    """Return a copy of ``state`` with the target temperature applied.

    Args:
        state: Device document as returned by Device/Get.
        target_temperature: New set point in degrees Celsius.

    Returns:
        Write payload for Device/SetAta.
    """
    payload = dict(state)
    payload[FIELD_SET_TEMPERATURE] = target_temperature
    if FIELD_SET_TEMPERATURE_ZONE1 in payload:
        payload[FIELD_SET_TEMPERATURE_ZONE1] = target_temperature
    payload[FIELD_EFFECTIVE_FLAGS] = EFFECTIVE_FLAG_SET_TEMPERATURE
    payload[FIELD_HAS_PENDING_COMMAND] = True
    return payload


class DeviceStateClient:
    """Read device telemetry and change the set temperature.

    Writes are read-modify-write and are not locked. Do not run two
    :meth:`set_device_temperature` calls against the same device at once.
    """

    def __init__(self, api: MelCloudAPI, auth: AuthSession) -> None:
        """Initialize the state client.

        Args:
            api: Transport for state requests.
            auth: Session providing the context key.
        """
        self._api = api
        self._auth = auth

    async def get_device_state(self, device_id: str | int, building_id: int) -> DeviceState:
        """Fetch the current state document of a device.

        Args:
            device_id: Device identifier.
            building_id: Identifier of the owning building.

        Returns:
            The telemetry document as returned by the service.

        Raises:
            AuthenticationError: If not logged in. No request is sent.
            MelCloudApiError: If the status is not 2xx.
            MelCloudConnectionError: If the connection fails.
        """
        context_key = self._auth.require_context_key()

        state: DeviceState = await self._api.request(
            "GET",
            ENDPOINT_DEVICE_GET,
            context_key=context_key,
            params={"id": str(device_id), "buildingID": str(building_id)},
        )
        return state

    async def set_device_temperature(
        self,
        device_id: str | int,
        building_id: int,
        target_temperature: float,
    ) -> bool:
        """Set the target temperature of a device.

        Sends two requests in order: Device/Get for the current document, then
        Device/SetAta with the modified document. The write is skipped if the
        read fails.

        Args:
            device_id: Device identifier.
            building_id: Identifier of the owning building.
            target_temperature: New set point in degrees Celsius.

        Returns:
            True once the service accepted the write.

        Raises:
            AuthenticationError: If not logged in. No request is sent.
            MelCloudApiError: If either request gets a non-2xx status, or if the
                read returns no state document, in which case nothing is written.
            MelCloudConnectionError: If either request fails to connect.
        """
        context_key = self._auth.require_context_key()

        state = await self.get_device_state(device_id, building_id)
        if not isinstance(state, dict) or not state:
            handler = self._api.error_handler
            error = handler.create_app_error(
                ErrorCategory.API,
                f"Malformed device state for device {device_id}: expected a non-empty object",
            )
            handler.log_error(error)
            raise error

        payload = build_temperature_payload(state, target_temperature)

        _LOGGER.debug("Setting device %s temperature to %s", device_id, target_temperature)

        await self._api.request(
            "POST",
            ENDPOINT_DEVICE_SET_ATA,
            context_key=context_key,
            json_data=payload,
        )

        _LOGGER.info("Device %s temperature set to %s", device_id, target_temperature)
        return True

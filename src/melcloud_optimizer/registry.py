"""Device enumeration and lookup for the MELCloud API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from melcloud_optimizer.const import ENDPOINT_LIST_DEVICES
from melcloud_optimizer.exceptions import ErrorCategory
from melcloud_optimizer.parsers import parse_devices


if TYPE_CHECKING:
    from melcloud_optimizer.api import MelCloudAPI
    from melcloud_optimizer.auth import AuthSession
    from melcloud_optimizer.models import Device

_LOGGER = logging.getLogger(__name__)


class DeviceRegistry:
    """Cache of the devices returned by the last successful enumeration."""

    def __init__(self, api: MelCloudAPI, auth: AuthSession) -> None:
        """Initialize the registry.

        Args:
            api: Transport for the ListDevices request.
            auth: Session providing the context key.
        """
        self._api = api
        self._auth = auth
        self._devices: list[Device] = []

    @property
    def devices(self) -> list[Device]:
        """Get a copy of the cached devices."""
        return list(self._devices)

    async def get_devices(self) -> list[Device]:
        """Fetch all devices of the account and replace the cache.

        Every device inherits the ID of the building it was listed under.

        Returns:
            List of Device instances.

        Raises:
            AuthenticationError: If not logged in. No request is sent.
            MelCloudApiError: If the status is not 2xx (``"API error: <status> <reason>"``).
                A 2xx body that is not a device list raises
                ``"Malformed device list: <cause>"``. The cache is left as it was.
            MelCloudConnectionError: If the connection fails.
        """
        context_key = self._auth.require_context_key()

        data = await self._api.request("GET", ENDPOINT_LIST_DEVICES, context_key=context_key)

        try:
            devices = parse_devices(data)
        except (TypeError, KeyError, ValueError, AttributeError) as exc:
            handler = self._api.error_handler
            error = handler.create_app_error(ErrorCategory.API, f"Malformed device list: {exc}", exc)
            handler.log_error(error)
            raise error from exc

        self._devices = devices
        _LOGGER.debug("Found %d device(s)", len(devices))
        return list(devices)

    def get_device_by_id(self, device_id: str | int) -> Device | None:
        """Look up a cached device. Performs no I/O.

        Args:
            device_id: Device identifier.

        Returns:
            The first cached Device with that id, or None.
        """
        wanted = str(device_id)
        return next((device for device in self._devices if device.id == wanted), None)

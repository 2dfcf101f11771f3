"""High-level MELCloud client.

This module wires the transport, the session, the device registry and the
state client together behind one object that owns the HTTP session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from aiohttp import ClientSession  # noqa: TC002 - Used at runtime for session injection

from melcloud_optimizer.api import MelCloudAPI
from melcloud_optimizer.auth import AuthSession
from melcloud_optimizer.const import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from melcloud_optimizer.devices import DeviceStateClient
from melcloud_optimizer.errors import ErrorHandler
from melcloud_optimizer.registry import DeviceRegistry


if TYPE_CHECKING:
    from types import TracebackType

    from melcloud_optimizer.models import Device, DeviceState


class MelCloudClient:
    """Authenticated client for the MELCloud HVAC service.

    Each client holds its own session and device cache; nothing is shared
    between instances.

    Example:
        Basic usage with automatic session management:

        ```python
        from melcloud_optimizer import MelCloudClient

        async with MelCloudClient() as client:
            await client.login("user@example.com", "password")
            devices = await client.get_devices()

            device = devices[0]
            state = await client.get_device_state(device.id, device.building_id)
            print(f"Room temperature: {state['RoomTemperatureZone1']}")

            await client.set_device_temperature(device.id, device.building_id, 21.5)
        ```

        Session injection:

        ```python
        from aiohttp import ClientSession

        async with ClientSession() as session:
            client = MelCloudClient(session=session)
            await client.login("user@example.com", "password")
        ```
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: ClientSession | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL for the API. Defaults to the MELCloud production API.
            session: Optional aiohttp ClientSession. If not provided, one will be
                created when entering the context manager.
            timeout: Total timeout in seconds for a single request.
            error_handler: Optional ErrorHandler for classifying and logging failures.
        """
        self._api = MelCloudAPI(
            session=session,
            base_url=base_url,
            timeout=timeout,
            error_handler=error_handler,
        )
        self._auth = AuthSession(self._api)
        self._registry = DeviceRegistry(self._api, self._auth)
        self._state = DeviceStateClient(self._api, self._auth)

    @property
    def api(self) -> MelCloudAPI:
        """Get the underlying transport."""
        return self._api

    @property
    def auth(self) -> AuthSession:
        """Get the session."""
        return self._auth

    @property
    def registry(self) -> DeviceRegistry:
        """Get the device registry."""
        return self._registry

    @property
    def state(self) -> DeviceStateClient:
        """Get the device state client."""
        return self._state

    async def __aenter__(self) -> MelCloudClient:
        """Enter the context manager, creating a session if needed."""
        await self._api.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager, closing the session if it was created here."""
        await self._api.__aexit__(exc_type, exc_val, exc_tb)

    def is_authenticated(self) -> bool:
        """Check if the client holds a context key."""
        return self._auth.is_authenticated()

    async def login(self, email: str, password: str) -> bool:
        """Log in. See :meth:`AuthSession.login`."""
        return await self._auth.login(email, password)

    async def get_devices(self) -> list[Device]:
        """Fetch all devices. See :meth:`DeviceRegistry.get_devices`."""
        return await self._registry.get_devices()

    def get_device_by_id(self, device_id: str | int) -> Device | None:
        """Look up a cached device. See :meth:`DeviceRegistry.get_device_by_id`."""
        return self._registry.get_device_by_id(device_id)

    async def get_device_state(self, device_id: str | int, building_id: int) -> DeviceState:
        """Fetch a device's state. See :meth:`DeviceStateClient.get_device_state`."""
        return await self._state.get_device_state(device_id, building_id)

    async def set_device_temperature(
        self,
        device_id: str | int,
        building_id: int,
        target_temperature: float,
    ) -> bool:
        """Set a device's temperature. See :meth:`DeviceStateClient.set_device_temperature`."""
        return await self._state.set_device_temperature(device_id, building_id, target_temperature)

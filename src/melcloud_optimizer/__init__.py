"""Python client library for MELCloud HVAC devices and optimization scheduling.

This package provides an async client for the MELCloud cloud service and a
guard that runs hourly and weekly optimization routines against it.

The library is organized into three layers:
1. **Transport** (melcloud_optimizer.api): HTTP exchanges with the MELCloud API
2. **Client** (melcloud_optimizer.auth, .registry, .devices, .client): session,
   device enumeration and device state read/write
3. **Scheduling** (melcloud_optimizer.scheduler, .schedule_guard): recurring
   optimization jobs

Example:
    ```python
    from melcloud_optimizer import APSchedulerBackend, MelCloudClient, ScheduleGuard, load_env_settings

    settings = load_env_settings()

    async with MelCloudClient() as client:
        await client.login(settings.get("melcloud_user"), settings.get("melcloud_pass"))
        devices = await client.get_devices()
        await client.set_device_temperature(devices[0].id, devices[0].building_id, 21.0)

        guard = ScheduleGuard(
            settings=settings,
            scheduler=APSchedulerBackend(),
            run_hourly=run_hourly,
            run_weekly=run_weekly,
        )
        guard.ensure_running_if_ready()
    ```
"""

from __future__ import annotations

from melcloud_optimizer.api import MelCloudAPI
from melcloud_optimizer.auth import AuthSession
from melcloud_optimizer.client import MelCloudClient
from melcloud_optimizer.devices import DeviceStateClient, build_temperature_payload
from melcloud_optimizer.errors import ErrorHandler
from melcloud_optimizer.exceptions import (
    AuthenticationError,
    ErrorCategory,
    MelCloudApiError,
    MelCloudConnectionError,
    MelCloudError,
    MelCloudTimeoutError,
)
from melcloud_optimizer.models import Device, DeviceState, LoginResponse, OptimizationResult, PairableDevice
from melcloud_optimizer.pairing import list_pairable_devices
from melcloud_optimizer.parsers import parse_devices, parse_login_response
from melcloud_optimizer.registry import DeviceRegistry
from melcloud_optimizer.schedule_guard import ScheduleGuard
from melcloud_optimizer.scheduler import APSchedulerBackend, JobHandle, Scheduler
from melcloud_optimizer.settings import MappingSettings, SettingsReader, load_env_settings


__version__ = "0.1.0"

__all__ = [
    "APSchedulerBackend",
    "AuthSession",
    "AuthenticationError",
    "Device",
    "DeviceRegistry",
    "DeviceState",
    "DeviceStateClient",
    "ErrorCategory",
    "ErrorHandler",
    "JobHandle",
    "LoginResponse",
    "MappingSettings",
    "MelCloudAPI",
    "MelCloudApiError",
    "MelCloudClient",
    "MelCloudConnectionError",
    "MelCloudError",
    "MelCloudTimeoutError",
    "OptimizationResult",
    "PairableDevice",
    "ScheduleGuard",
    "Scheduler",
    "SettingsReader",
    "__version__",
    "build_temperature_payload",
    "list_pairable_devices",
    "load_env_settings",
    "parse_devices",
    "parse_login_response",
]

"""Run the hourly and weekly jobs against a configured device.

Reads MELCLOUD_USER, MELCLOUD_PASS, DEVICE_ID and BUILDING_ID from the
environment or a .env file.
"""

import asyncio
import logging

from melcloud_optimizer import (
    APSchedulerBackend,
    MelCloudClient,
    OptimizationResult,
    ScheduleGuard,
    load_env_settings,
)


COMFORT_TEMPERATURE = 21.0


async def main() -> None:
    """Keep the configured device at a fixed comfort temperature."""
    logging.basicConfig(level=logging.INFO)
    settings = load_env_settings()

    async with MelCloudClient() as client:
        await client.login(settings.get("melcloud_user") or "", settings.get("melcloud_pass") or "")
        device_id = settings.get("device_id") or ""
        building_id = int(settings.get("building_id") or 0)

        async def run_hourly() -> OptimizationResult:
            state = await client.get_device_state(device_id, building_id)
            if state.get("SetTemperature") != COMFORT_TEMPERATURE:
                await client.set_device_temperature(device_id, building_id, COMFORT_TEMPERATURE)
            return OptimizationResult(success=True, data={"targetTemp": COMFORT_TEMPERATURE})

        async def run_weekly() -> OptimizationResult:
            return OptimizationResult(success=True, data={"method": "fixed set point"})

        backend = APSchedulerBackend()
        guard = ScheduleGuard(settings, backend, run_hourly, run_weekly)
        if not guard.ensure_running_if_ready():
            return

        try:
            await asyncio.Event().wait()
        finally:
            guard.shutdown()
            backend.shutdown()


if __name__ == "__main__":
    asyncio.run(main())

"""Basic usage example for melcloud_optimizer."""

import asyncio

from melcloud_optimizer import MelCloudClient, load_env_settings


async def main() -> None:
    """Log in, list devices and nudge the first one's set point."""
    settings = load_env_settings()

    async with MelCloudClient() as client:
        await client.login(settings.get("melcloud_user") or "", settings.get("melcloud_pass") or "")
        print("Logged in to MELCloud")

        devices = await client.get_devices()
        print(f"Found {len(devices)} device(s)")

        for device in devices:
            print(f"\nDevice: {device.name}")
            print(f"  Device ID: {device.id}")
            print(f"  Building ID: {device.building_id}")

            state = await client.get_device_state(device.id, device.building_id)
            print(f"  Room temperature: {state.get('RoomTemperatureZone1')}")
            print(f"  Set temperature: {state.get('SetTemperature')}")

        if devices:
            device = devices[0]
            state = await client.get_device_state(device.id, device.building_id)
            target = float(state["SetTemperature"]) + 0.5
            print(f"\nSetting {device.name} to {target}°C...")
            await client.set_device_temperature(device.id, device.building_id, target)


if __name__ == "__main__":
    asyncio.run(main())

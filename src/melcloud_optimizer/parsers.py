"""Parsing utilities for MELCloud API responses.

This module converts raw API payloads into data models. It performs no I/O.
"""

from __future__ import annotations

from typing import Any

from melcloud_optimizer.models import Device, LoginResponse


__all__ = [
    "parse_devices",
    "parse_login_response",
]


def parse_login_response(data: dict[str, Any]) -> LoginResponse:
    """Parse the ClientLogin response.

    Args:
        data: Raw response in format:
              {"ErrorId": int | None, "ErrorMessage": str, "LoginData": {"ContextKey": str}}

    Returns:
        LoginResponse instance.
    """
    login_data = data.get("LoginData") or {}
    return LoginResponse(
        error_id=data.get("ErrorId"),
        error_message=data.get("ErrorMessage"),
        context_key=login_data.get("ContextKey"),
    )


def _structure_devices(structure: dict[str, Any]) -> list[dict[str, Any]]:
    """Collect raw device records from a building structure.

    Devices can sit directly on the structure, on floors, in areas on floors,
    or in areas without a floor.
    """
    devices: list[dict[str, Any]] = list(structure.get("Devices") or [])

    for floor in structure.get("Floors") or []:
        devices.extend(floor.get("Devices") or [])
        for area in floor.get("Areas") or []:
            devices.extend(area.get("Devices") or [])

    for area in structure.get("Areas") or []:
        devices.extend(area.get("Devices") or [])

    return devices


def parse_devices(data: list[dict[str, Any]]) -> list[Device]:
    """Flatten a ListDevices response into Device entities.

    Each device inherits its parent building's ID as ``building_id``.

    Args:
        data: Raw response in format:
              [{"ID": int, "Structure": {"Devices": [{"DeviceID": int, "DeviceName": str}]}}]

    Returns:
        List of Device instances in response order.

    Raises:
        TypeError: If the payload is not a list of building records.
        KeyError: If a building or device record misses its identifier.
    """
    if not isinstance(data, list):
        msg = f"Expected a list of buildings, got {type(data).__name__}"
        raise TypeError(msg)

    devices: list[Device] = []
    for building in data:
        building_id = int(building["ID"])
        for raw_device in _structure_devices(building.get("Structure") or {}):
            devices.append(
                Device(
                    id=str(raw_device["DeviceID"]),
                    name=raw_device.get("DeviceName", ""),
                    building_id=building_id,
                )
            )

    return devices

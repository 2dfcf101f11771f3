"""Data models for MELCloud API responses and optimizer results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


__all__ = [
    "Device",
    "DeviceState",
    "LoginResponse",
    "OptimizationResult",
    "PairableDevice",
]

DeviceState = dict[str, Any]


@dataclass(frozen=True)
class Device:
    """A controllable HVAC unit from the last device enumeration.

    Attributes:
        id: Device identifier (the service's DeviceID as a string).
        name: Human-readable device name.
        building_id: Identifier of the building that owns the device.
    """

    id: str
    name: str
    building_id: int


@dataclass
class LoginResponse:
    """Response from the login endpoint.

    Attributes:
        error_id: Service error code, None on success.
        error_message: Service error message, if any.
        context_key: Session token, None when login failed.
    """

    error_id: int | None
    error_message: str | None = None
    context_key: str | None = None

    @property
    def succeeded(self) -> bool:
        """Check if the service accepted the credentials."""
        return self.error_id is None


@dataclass
class OptimizationResult:
    """Outcome of an hourly optimization or weekly calibration run.

    Attributes:
        success: Whether the run completed.
        message: Optional message, usually the failure reason.
        data: Optional run details (target temperature, savings, method, ...).
    """

    success: bool
    message: str | None = None
    data: dict[str, Any] | None = None

    @classmethod
    def from_value(cls, value: OptimizationResult | Mapping[str, Any] | None) -> OptimizationResult:
        """Normalize whatever an optimization callable returned."""
        if isinstance(value, OptimizationResult):
            return value
        if value is None:
            return cls(success=False, message="No result returned")
        return cls(
            success=bool(value.get("success", False)),
            message=value.get("message"),
            data=value.get("data"),
        )


@dataclass
class PairableDevice:
    """Device description handed to the host platform's pairing list.

    Attributes:
        name: Display name.
        data: Identity data for the paired device.
        store: Values persisted with the paired device.
        settings: Initial device settings.
    """

    name: str
    data: dict[str, Any] = field(default_factory=dict)
    store: dict[str, Any] = field(default_factory=dict)
    settings: dict[str, Any] = field(default_factory=dict)

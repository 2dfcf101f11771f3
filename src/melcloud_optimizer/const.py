"""Constants for melcloud_optimizer library."""

from __future__ import annotations


# API Configuration
DEFAULT_BASE_URL = "https://app.melcloud.com/Mitsubishi.Wifi.Client"
DEFAULT_TIMEOUT = 30  # seconds
DEFAULT_APP_VERSION = "1.34.12.0"
SERVICE_NAME = "MELCloud"

# Endpoints (relative to base URL)
ENDPOINT_LOGIN = "/Login/ClientLogin"
ENDPOINT_LIST_DEVICES = "/User/ListDevices"
ENDPOINT_DEVICE_GET = "/Device/Get"
ENDPOINT_DEVICE_SET_ATA = "/Device/SetAta"

# Headers
HEADER_CONTEXT_KEY = "X-MitsContextKey"
CONTENT_TYPE_JSON = "application/json"

# Device state fields
FIELD_SET_TEMPERATURE = "SetTemperature"
FIELD_SET_TEMPERATURE_ZONE1 = "SetTemperatureZone1"
FIELD_EFFECTIVE_FLAGS = "EffectiveFlags"
FIELD_HAS_PENDING_COMMAND = "HasPendingCommand"
EFFECTIVE_FLAG_SET_TEMPERATURE = 0x04

# Schedules
HOURLY_CRON = "0 * * * *"  # top of every hour
WEEKLY_CRON = "0 2 * * sun"  # Sunday 02:00
DEFAULT_TIMEZONE = "Europe/Oslo"

# Setting keys
SETTING_USER = "melcloud_user"
SETTING_PASSWORD = "melcloud_pass"
SETTING_DEVICE_ID = "device_id"
SETTING_BUILDING_ID = "building_id"

# Environment variables mapped onto setting keys
ENV_SETTING_KEYS = {
    "MELCLOUD_USER": SETTING_USER,
    "MELCLOUD_PASS": SETTING_PASSWORD,
    "DEVICE_ID": SETTING_DEVICE_ID,
    "BUILDING_ID": SETTING_BUILDING_ID,
}

# Pairing
PAIRING_NAME_SUFFIX = "(Boiler)"
PAIRING_ID_PREFIX = "melcloud_boiler_"

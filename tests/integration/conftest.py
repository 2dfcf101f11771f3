"""Pytest configuration and fixtures for integration tests."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

from melcloud_optimizer import MelCloudClient
from melcloud_optimizer.const import DEFAULT_BASE_URL


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


# Load .env file from project root
env_path = Path(__file__).parents[2] / ".env"
load_dotenv(env_path)


@pytest.fixture(scope="session")
def integration_config() -> dict[str, str]:
    """Load integration test configuration from environment.

    Returns:
        Dictionary with account credentials and API base URL.
    """
    email = os.getenv("MELCLOUD_USER")
    password = os.getenv("MELCLOUD_PASS")
    base_url = os.getenv("MELCLOUD_API_BASE_URL", DEFAULT_BASE_URL)

    if not email or not password:
        pytest.skip("Create a .env file with MELCLOUD_USER and MELCLOUD_PASS to run integration tests")

    return {
        "email": email,
        "password": password,
        "base_url": base_url,
    }


@pytest.fixture
def test_device_id() -> str | None:
    """Get the device ID to test against, or None to use the first device found."""
    return os.getenv("DEVICE_ID")


@pytest.fixture
async def logged_in_client(integration_config: dict[str, str]) -> AsyncGenerator[MelCloudClient]:
    """Create a client that has logged in to the real service."""
    async with MelCloudClient(base_url=integration_config["base_url"]) as client:
        await client.login(integration_config["email"], integration_config["password"])
        yield client


@pytest.fixture(autouse=True)
async def rate_limit_delay(request: pytest.FixtureRequest) -> AsyncGenerator[None]:
    """Pause after each integration test to stay under the service's rate limits."""
    yield
    if "integration" in request.keywords:
        await asyncio.sleep(2.0)

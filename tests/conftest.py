"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import ClientSession, web

from melcloud_optimizer.client import MelCloudClient


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from aiohttp.test_utils import TestClient

    from melcloud_optimizer.scheduler import TickCallback


API_PREFIX = "/Mitsubishi.Wifi.Client"
CONTEXT_KEY = "test-context-key"

SAMPLE_LOGIN_RESPONSE: dict[str, Any] = {
    "ErrorId": None,
    "LoginData": {"ContextKey": CONTEXT_KEY},
}

SAMPLE_DEVICES_RESPONSE: list[dict[str, Any]] = [
    {
        "ID": 123,
        "Structure": {
            "Devices": [
                {
                    "DeviceID": 456,
                    "DeviceName": "Test Device",
                }
            ]
        },
    }
]

SAMPLE_STATE_RESPONSE: dict[str, Any] = {
    "DeviceID": "123",
    "BuildingID": 456,
    "RoomTemperatureZone1": 21.5,
    "SetTemperature": 21.0,
    "Power": True,
    "OperationMode": 1,
}


@dataclass
class RecordedRequest:
    """A request received by the fake MELCloud server."""

    method: str
    path: str
    query: dict[str, str]
    headers: dict[str, str]
    body: Any


@dataclass
class FakeMelCloud:
    """In-process stand-in for the MELCloud API.

    Responses can be replaced per endpoint, and any endpoint can be made to
    answer with an error status through ``failures``.
    """

    login_response: Any = field(default_factory=lambda: dict(SAMPLE_LOGIN_RESPONSE))
    devices_response: Any = field(default_factory=lambda: list(SAMPLE_DEVICES_RESPONSE))
    state_response: Any = field(default_factory=lambda: dict(SAMPLE_STATE_RESPONSE))
    set_response: Any = field(default_factory=dict)
    failures: dict[str, int] = field(default_factory=dict)
    requests: list[RecordedRequest] = field(default_factory=list)

    @property
    def paths(self) -> list[str]:
        """Get the endpoint paths hit so far, in order."""
        return [request.path for request in self.requests]

    async def _record(self, request: web.Request) -> RecordedRequest:
        body = await request.json() if request.can_read_body else None
        recorded = RecordedRequest(
            method=request.method,
            path=request.path.removeprefix(API_PREFIX),
            query=dict(request.query),
            headers=dict(request.headers),
            body=body,
        )
        self.requests.append(recorded)
        return recorded

    def _respond(self, endpoint: str, payload: Any) -> web.Response:
        status = self.failures.get(endpoint)
        if status is not None:
            return web.Response(status=status, text='{"error": "Internal Server Error"}')
        return web.json_response(payload)

    async def login(self, request: web.Request) -> web.Response:
        await self._record(request)
        return self._respond("/Login/ClientLogin", self.login_response)

    async def list_devices(self, request: web.Request) -> web.Response:
        await self._record(request)
        return self._respond("/User/ListDevices", self.devices_response)

    async def get_state(self, request: web.Request) -> web.Response:
        await self._record(request)
        return self._respond("/Device/Get", self.state_response)

    async def set_ata(self, request: web.Request) -> web.Response:
        await self._record(request)
        return self._respond("/Device/SetAta", self.set_response)

    def make_app(self) -> web.Application:
        """Build the aiohttp application serving the fake endpoints."""
        app = web.Application()
        app.router.add_post(f"{API_PREFIX}/Login/ClientLogin", self.login)
        app.router.add_get(f"{API_PREFIX}/User/ListDevices", self.list_devices)
        app.router.add_get(f"{API_PREFIX}/Device/Get", self.get_state)
        app.router.add_post(f"{API_PREFIX}/Device/SetAta", self.set_ata)
        return app


@pytest.fixture
def fake_melcloud() -> FakeMelCloud:
    """Create a fake MELCloud server."""
    return FakeMelCloud()


@pytest.fixture
async def client(aiohttp_client: Any, fake_melcloud: FakeMelCloud) -> MelCloudClient:
    """Create a MelCloudClient talking to the fake server."""
    test_client: TestClient = await aiohttp_client(fake_melcloud.make_app())
    return MelCloudClient(
        base_url=str(test_client.make_url(API_PREFIX)),
        session=test_client.session,
    )


@pytest.fixture
async def logged_in_client(client: MelCloudClient) -> MelCloudClient:
    """Create a client that already holds a context key."""
    client.auth.context_key = CONTEXT_KEY
    return client


@pytest.fixture
async def mock_session() -> AsyncGenerator[ClientSession]:
    """Create a mock aiohttp ClientSession.

    Yields:
        Mock ClientSession for testing.
    """
    session = AsyncMock(spec=ClientSession)
    session.closed = False

    async def mock_close() -> None:
        session.closed = True

    session.close = mock_close

    yield session

    if not session.closed:
        await session.close()


@pytest.fixture
def mock_response() -> MagicMock:
    """Create a mock aiohttp ClientResponse usable in ``async with``.

    Returns:
        Mock ClientResponse for testing.
    """
    response = MagicMock()
    response.status = HTTPStatus.OK
    response.reason = "OK"
    response.headers = {}
    response.json = AsyncMock(return_value={})
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=None)
    return response


class FakeJob:
    """JobHandle recording how it was created and driven."""

    def __init__(self, cron_expression: str, timezone: str, callback: TickCallback, name: str | None) -> None:
        self.cron_expression = cron_expression
        self.timezone = timezone
        self.callback = callback
        self.name = name
        self.running = False
        self.start_calls = 0
        self.stop_calls = 0

    def start(self) -> None:
        self.start_calls += 1
        self.running = True

    def stop(self) -> None:
        self.stop_calls += 1
        self.running = False

    def is_running(self) -> bool:
        return self.running

    async def fire(self) -> None:
        """Run one tick, as the scheduler would."""
        await self.callback()


class FakeScheduler:
    """Scheduler that hands out FakeJob instances instead of real timers."""

    def __init__(self) -> None:
        self.jobs: list[FakeJob] = []

    def schedule(
        self,
        cron_expression: str,
        timezone: str,
        callback: TickCallback,
        *,
        name: str | None = None,
    ) -> FakeJob:
        job = FakeJob(cron_expression, timezone, callback, name)
        self.jobs.append(job)
        return job


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    """Create a scheduler that never fires on its own."""
    return FakeScheduler()

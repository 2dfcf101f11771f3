"""Low-level HTTP transport for the MELCloud API.

This module performs single request/response exchanges with the MELCloud
service and turns every failure into a typed, logged ``MelCloudError``.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from aiohttp import ClientError, ClientSession, ClientTimeout

from melcloud_optimizer.const import CONTENT_TYPE_JSON, DEFAULT_BASE_URL, DEFAULT_TIMEOUT, HEADER_CONTEXT_KEY
from melcloud_optimizer.errors import ErrorHandler
from melcloud_optimizer.exceptions import ErrorCategory, MelCloudApiError


if TYPE_CHECKING:
    from types import TracebackType

    from melcloud_optimizer.exceptions import MelCloudError

_LOGGER = logging.getLogger(__name__)


class MelCloudAPI:
    """HTTP transport for the MELCloud cloud service.

    Each call to :meth:`request` sends one request, reads the whole body and
    parses it as JSON. Partial responses are never exposed to callers.

    Example:
        ```python
        from aiohttp import ClientSession
        from melcloud_optimizer.api import MelCloudAPI

        async with ClientSession() as session:
            api = MelCloudAPI(session=session)
            buildings = await api.request("GET", "/User/ListDevices", context_key=key)
        ```

    Attributes:
        base_url: Base URL for the API (without trailing slash).
    """

    def __init__(
        self,
        *,
        session: ClientSession | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            session: Optional aiohttp ClientSession. If not provided, one will be
                created when entering the context manager.
            base_url: Base URL for the API. Defaults to the MELCloud production API.
            timeout: Total timeout in seconds for a single request.
            error_handler: Optional ErrorHandler shared with the other client parts.
        """
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None
        self._timeout = ClientTimeout(total=timeout)
        self._error_handler = error_handler or ErrorHandler()

    @property
    def error_handler(self) -> ErrorHandler:
        """Get the error handler used for failures."""
        return self._error_handler

    def set_session(self, session: ClientSession) -> None:
        """Use a session managed by someone else. It will not be closed here."""
        self._session = session
        self._owns_session = False

    async def __aenter__(self) -> MelCloudAPI:
        """Enter the context manager, creating a session if none was provided."""
        if self._session is None:
            self._session = ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager, closing the session if it was created here."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _validate_session(self) -> ClientSession:
        """Return the open session.

        Raises:
            RuntimeError: If session is not initialized or is closed.
        """
        if self._session is None:
            msg = "Session not initialized. Use 'async with' or provide a session."
            raise RuntimeError(msg)

        if self._session.closed:
            msg = "Session is closed. Cannot make requests."
            raise RuntimeError(msg)

        return self._session

    def _fail(
        self,
        category: ErrorCategory,
        message: str,
        original_error: BaseException | None = None,
        *,
        status: int | None = None,
    ) -> MelCloudError:
        """Create and log an error for a failed exchange."""
        error = self._error_handler.create_app_error(category, message, original_error)
        if isinstance(error, MelCloudApiError):
            error.status = status
        self._error_handler.log_error(error)
        return error

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        context_key: str | None = None,
        json_data: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        status_error_category: ErrorCategory = ErrorCategory.API,
    ) -> Any:
        """Perform one request and return the parsed JSON body.

        Args:
            method: HTTP method (GET, POST).
            endpoint: API endpoint path (e.g., "/User/ListDevices").
            context_key: Session token sent in the X-MitsContextKey header.
            json_data: Optional JSON data for request body.
            params: Optional query parameters.
            status_error_category: Category used when the service answers
                with a non-2xx status.

        Returns:
            Parsed JSON body, or None if the body is empty.

        Raises:
            MelCloudConnectionError: If the connection fails or times out.
            MelCloudApiError: If the body is not valid JSON.
            MelCloudError: With ``status_error_category`` if the status is not 2xx.
            RuntimeError: If session is not initialized or is closed.
        """
        session = self._validate_session()

        url = f"{self.base_url}{endpoint}"
        headers = {"Accept": CONTENT_TYPE_JSON}
        if context_key is not None:
            headers[HEADER_CONTEXT_KEY] = context_key

        _LOGGER.debug("%s %s", method, url)

        try:
            async with session.request(
                method,
                url,
                json=json_data,
                params=params,
                headers=headers,
                timeout=self._timeout,
            ) as response:
                status_line = f"{response.status} {response.reason}"

                if not 200 <= response.status < 300:  # noqa: PLR2004
                    msg = f"API error: {status_line}"
                    raise self._fail(status_error_category, msg, status=response.status)

                try:
                    data = await response.json(content_type=None)
                except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                    msg = f"API error: {status_line}"
                    raise self._fail(ErrorCategory.API, msg, exc, status=response.status) from exc

        except TimeoutError as exc:
            msg = "API request error: request timed out"
            raise self._fail(ErrorCategory.NETWORK, msg, exc) from exc

        except ClientError as exc:
            msg = f"API request error: {exc}"
            raise self._fail(ErrorCategory.NETWORK, msg, exc) from exc

        return data

"""Session handling for the MELCloud API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from melcloud_optimizer.const import DEFAULT_APP_VERSION, ENDPOINT_LOGIN, SERVICE_NAME
from melcloud_optimizer.exceptions import ErrorCategory
from melcloud_optimizer.parsers import parse_login_response


if TYPE_CHECKING:
    from melcloud_optimizer.api import MelCloudAPI
    from melcloud_optimizer.exceptions import MelCloudError

_LOGGER = logging.getLogger(__name__)


class AuthSession:
    """Own the MELCloud context key for one client instance.

    The session is either unauthenticated (``context_key is None``) or holds the
    key returned by the last successful :meth:`login`. There is no expiry
    tracking: when the service rejects the key, log in again.

    Logins are not serialized. Two overlapping logins race on the stored key,
    so callers drive login from a single setup flow.

    Attributes:
        context_key: Session token sent with authenticated requests (None if
            not logged in).
    """

    def __init__(self, api: MelCloudAPI, *, app_version: str = DEFAULT_APP_VERSION) -> None:
        """Initialize the session.

        Args:
            api: Transport used for the login request.
            app_version: Client version reported to the service on login.
        """
        self._api = api
        self._app_version = app_version
        self.context_key: str | None = None

    def is_authenticated(self) -> bool:
        """Check if a context key is held."""
        return self.context_key is not None

    def require_context_key(self) -> str:
        """Return the context key or fail without touching the network.

        Raises:
            AuthenticationError: If not logged in.
        """
        if self.context_key is None:
            raise self._api.error_handler.create_app_error(ErrorCategory.AUTH, "Not logged in")
        return self.context_key

    async def login(self, email: str, password: str) -> bool:
        """Log in with the account credentials and store the context key.

        Args:
            email: Account email address.
            password: Account password.

        Returns:
            True if the service accepted the credentials.

        Raises:
            MelCloudApiError: If the service reports a login error.
            MelCloudConnectionError: If the request fails or the status is not 2xx.
        """
        payload = {
            "Email": email,
            "Password": password,
            "Language": 0,
            "AppVersion": self._app_version,
            "Persist": True,
            "CaptchaResponse": None,
        }

        _LOGGER.debug("Logging in to %s as %s", SERVICE_NAME, email)

        data = await self._api.request(
            "POST",
            ENDPOINT_LOGIN,
            json_data=payload,
            status_error_category=ErrorCategory.NETWORK,
        )

        response = parse_login_response(data if isinstance(data, dict) else {})
        if not response.succeeded:
            msg = f"{SERVICE_NAME} login failed: {response.error_message}"
            raise self._login_failed(msg)

        if not response.context_key:
            msg = f"{SERVICE_NAME} login failed: missing context key"
            raise self._login_failed(msg)

        self.context_key = response.context_key
        _LOGGER.info("Logged in to %s", SERVICE_NAME)
        return True

    def _login_failed(self, message: str) -> MelCloudError:
        """Create and log an API error for a rejected login."""
        handler = self._api.error_handler
        error = handler.create_app_error(ErrorCategory.API, message)
        handler.log_error(error)
        return error

    def clear(self) -> None:
        """Forget the context key."""
        self.context_key = None
        _LOGGER.debug("Session cleared")

"""Error classification and logging for MELCloud operations."""

from __future__ import annotations

import logging

from aiohttp import ClientError

from melcloud_optimizer.exceptions import (
    AuthenticationError,
    ErrorCategory,
    MelCloudApiError,
    MelCloudConnectionError,
    MelCloudError,
    MelCloudTimeoutError,
)


_LOGGER = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Network error occurred"

_CATEGORY_CLASSES: dict[ErrorCategory, type[MelCloudError]] = {
    ErrorCategory.NETWORK: MelCloudConnectionError,
    ErrorCategory.API: MelCloudApiError,
    ErrorCategory.AUTH: AuthenticationError,
    ErrorCategory.UNKNOWN: MelCloudError,
}


class ErrorHandler:
    """Create and log typed application errors.

    Every failure surfaced by the transport, the auth session and the device
    clients is built here, so callers always receive a ``MelCloudError`` with
    a category, a message and the original cause.

    Example:
        ```python
        handler = ErrorHandler()
        try:
            ...
        except ClientError as exc:
            error = handler.create_app_error(ErrorCategory.NETWORK, f"API request error: {exc}", exc)
            handler.log_error(error)
            raise error from exc
        ```
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize the error handler.

        Args:
            logger: Optional logger to report errors to. Defaults to this module's logger.
        """
        self._logger = logger or _LOGGER

    def create_app_error(
        self,
        category: ErrorCategory | None = None,
        message: str | None = None,
        original_error: BaseException | None = None,
    ) -> MelCloudError:
        """Build an application error, filling in defaults for missing inputs.

        Args:
            category: Error category. Defaults to NETWORK.
            message: Error message. Defaults to a generic network error message.
            original_error: Underlying cause. Defaults to an Exception wrapping the message.

        Returns:
            The MelCloudError subclass matching the category.
        """
        category = category or ErrorCategory.NETWORK
        message = message or DEFAULT_ERROR_MESSAGE
        error_cls = _CATEGORY_CLASSES.get(category, MelCloudError)
        if category is ErrorCategory.NETWORK and isinstance(original_error, TimeoutError):
            error_cls = MelCloudTimeoutError
        return error_cls(message, original_error)

    def log_error(self, error: BaseException) -> None:
        """Log an error. Never raises."""
        if isinstance(error, MelCloudError):
            self._logger.error(
                "[%s] %s (caused by %s)",
                error.category.value,
                error.message,
                type(error.original_error).__name__,
            )
        else:
            self._logger.error("[%s] %s", self.categorize(error).value, error)

    def categorize(self, error: BaseException) -> ErrorCategory:
        """Map an arbitrary exception onto an error category."""
        if isinstance(error, MelCloudError):
            return error.category
        if isinstance(error, (ClientError, TimeoutError, OSError)):
            return ErrorCategory.NETWORK
        return ErrorCategory.UNKNOWN

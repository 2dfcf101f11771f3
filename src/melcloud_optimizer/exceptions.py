"""Custom exceptions for melcloud_optimizer library."""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Category of an application error."""

    NETWORK = "NETWORK"
    API = "API"
    AUTH = "AUTH"
    UNKNOWN = "UNKNOWN"


class MelCloudError(Exception):
    """Base exception for all MELCloud errors.

    Attributes:
        category: Error category used for classification and logging.
        message: Human readable error message.
        original_error: The underlying cause.
    """

    category = ErrorCategory.UNKNOWN

    def __init__(self, message: str = "", original_error: BaseException | None = None) -> None:
        """Initialize MelCloudError.

        Args:
            message: Error message.
            original_error: Optional underlying exception. Defaults to a plain
                Exception wrapping the message.
        """
        super().__init__(message)
        self.message = message
        self.original_error = original_error if original_error is not None else Exception(message)


class MelCloudConnectionError(MelCloudError):
    """Exception raised for connection failures."""

    category = ErrorCategory.NETWORK


class MelCloudTimeoutError(MelCloudConnectionError):
    """Exception raised when API requests timeout."""


class MelCloudApiError(MelCloudError):
    """Exception raised for non-2xx responses and service-reported errors.

    Attributes:
        status: Optional HTTP status code of the failed response.
    """

    category = ErrorCategory.API

    def __init__(
        self,
        message: str = "",
        original_error: BaseException | None = None,
        status: int | None = None,
    ) -> None:
        """Initialize MelCloudApiError.

        Args:
            message: Error message.
            original_error: Optional underlying exception.
            status: Optional HTTP status code.
        """
        super().__init__(message, original_error)
        self.status = status


class AuthenticationError(MelCloudError):
    """Exception raised when an operation needs a session and none exists."""

    category = ErrorCategory.AUTH

"""
Error taxonomy for the request layer and the clients built on it.

Every failure in the build → send → decode chain surfaces as one of these.
Callers that want a single catch-all can catch :class:`RestError`.
"""

from __future__ import annotations


class RestError(Exception):
    """Base class for all request-layer failures."""


class ConfigurationError(RestError):
    """A builder or client precondition is unmet; no request was sent."""


class TransportError(RestError):
    """The server could not be reached (connection, TLS, timeout)."""


class BodyReadError(RestError):
    """The response arrived but its body could not be read."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ApplicationError(RestError):
    """
    The server answered, and the error handler judged the answer a failure.

    Attributes:
        status_code: HTTP status code of the response.
        message: Human-readable failure text.
        details: Individual error messages parsed from the body, if any.
        warnings: Warning messages parsed from the body, if any.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        details: list[str] | None = None,
        warnings: list[str] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = list(details or [])
        self.warnings = list(warnings or [])

    @classmethod
    def generic(cls, status_code: int) -> "ApplicationError":
        """Build the fallback error that carries only the status code."""
        return cls(status_code, f"Error {status_code} status code from request")


class DecodeError(RestError):
    """A response body could not be turned into the caller's structure."""

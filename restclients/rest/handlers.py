"""
Error handlers: map a status code and response body to success or failure.

``handle`` returns ``None`` when the response is a success and an
:class:`~restclients.rest.errors.ApplicationError` describing the failure
otherwise.  :class:`~restclients.rest.request.Request` raises whatever the
handler returns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .config import DEFAULT_SUCCESS_CODES
from .errors import ApplicationError


class ErrorHandler(ABC):
    """Decides whether a status code and body constitute a failure."""

    @abstractmethod
    def handle(self, code: int, data: bytes) -> ApplicationError | None:
        """Return ``None`` on success, or the error describing the failure."""


class DefaultErrorHandler(ErrorHandler):
    """
    Status-code-only handling, used when a builder is given no handler.

    200 and 201 are successes; anything else is a generic failure carrying
    the code.  The body is never inspected.
    """

    success_codes: frozenset[int] = DEFAULT_SUCCESS_CODES

    def handle(self, code: int, data: bytes) -> ApplicationError | None:
        if code in self.success_codes:
            return None
        return ApplicationError.generic(code)

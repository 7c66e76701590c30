"""
Error handling for Check Point management API responses.

Failed calls answer with a document such as::

    {
        "code": "err_validation_failed",
        "message": "Validation failed with 1 error",
        "errors": [{"message": "More than one object named 'h1' exists."}],
        "warnings": [{"message": "..."}],
        "blocking-errors": [{"message": "..."}]
    }

The handler folds the message and every error / blocking-error message into
the failure text.  A body that is empty or cannot be parsed degrades to the
generic status-code error rather than hiding the HTTP failure.
"""

from __future__ import annotations

import json
import logging

from ..rest.errors import ApplicationError
from ..rest.handlers import ErrorHandler

logger = logging.getLogger(__name__)


def _messages(entries) -> list[str]:
    """Extract ``message`` strings from a list of error objects."""
    if not isinstance(entries, list):
        return []
    return [
        str(entry["message"])
        for entry in entries
        if isinstance(entry, dict) and entry.get("message")
    ]


class CheckpointErrorHandler(ErrorHandler):
    """Success only on 200; otherwise a descriptive ApplicationError."""

    def handle(self, code: int, data: bytes) -> ApplicationError | None:
        if code == 200:
            return None
        if not data:
            return ApplicationError.generic(code)

        try:
            document = json.loads(data)
        except ValueError as exc:
            logger.debug("Unparseable error body for status %d: %s", code, exc)
            return ApplicationError.generic(code)
        if not isinstance(document, dict):
            return ApplicationError.generic(code)

        details = _messages(document.get("errors")) + _messages(
            document.get("blocking-errors")
        )
        warnings = _messages(document.get("warnings"))
        lines = [str(document["message"])] if document.get("message") else []
        lines.extend(details)

        if not lines:
            return ApplicationError.generic(code)
        return ApplicationError(code, "\n".join(lines), details=details, warnings=warnings)

"""
Error handling for the widget service.

The service is a Spring REST application, so failures answer with::

    {"timestamp": "...", "status": 404, "error": "Not Found", "message": "..."}
"""

from __future__ import annotations

import json
import logging

from ..rest.errors import ApplicationError
from ..rest.handlers import ErrorHandler

logger = logging.getLogger(__name__)


class WidgetErrorHandler(ErrorHandler):
    """200, 201 and 204 are successes; anything else is an ApplicationError."""

    success_codes: frozenset[int] = frozenset({200, 201, 204})

    def handle(self, code: int, data: bytes) -> ApplicationError | None:
        if code in self.success_codes:
            return None

        try:
            document = json.loads(data) if data else {}
        except ValueError as exc:
            logger.debug("Unparseable error body for status %d: %s", code, exc)
            document = {}
        if not isinstance(document, dict) or not document.get("error"):
            return ApplicationError.generic(code)

        error = document["error"]
        message = document.get("message") or ""
        return ApplicationError(code, f"{code} - {error} : {message}")

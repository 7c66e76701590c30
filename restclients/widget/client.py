"""
Widget service CRUD client.

Widgets live under ``<base_url>/widget``; a single widget under
``<base_url>/widget/<id>``.  Create and update take a new-widget payload
(``name`` required, ``size`` optional) and return the full widget
(``id``, ``uid``, ``name``, ``size``).
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from ..rest.auth import AuthStrategy, BasicAuth, NoAuth
from ..rest.config import ACCEPT_HEADER, HTTPMethod
from ..rest.errors import ConfigurationError, DecodeError
from ..rest.parser import build_endpoint_url, decode_response, encode_message
from ..rest.request import RequestBuilder, is_valid_url
from ..rest.transport import build_transport
from .config import ENDPOINT_WIDGET, REQUIRED_WIDGET_FIELDS, WIDGET_FIELDS, WidgetConfig
from .handlers import WidgetErrorHandler

logger = logging.getLogger(__name__)


def validate_new_widget(widget: dict) -> dict:
    """
    Check a create/update payload before it is sent.

    Raises:
        ConfigurationError: ``name`` is missing or empty.
    """
    if not isinstance(widget, dict) or not widget.get("name"):
        raise ConfigurationError("Missing Name")
    return widget


def validate_widget(data: Any) -> dict:
    """
    Check a widget returned by the service.

    Raises:
    Fields the service adds beyond the known widget fields are dropped.

    Returns:
        The widget restricted to ``id``, ``uid``, ``name``, ``size``.

    Raises:
        DecodeError: Not an object, or lacks ``id`` / ``uid`` / ``name``.
    """
    if not isinstance(data, dict):
        raise DecodeError("Unable to transform to Widget: response is not an object")
    if any(not data.get(field) for field in REQUIRED_WIDGET_FIELDS):
        raise DecodeError("Unable to transform to Widget due to missing parameters")
    return {key: value for key, value in data.items() if key in WIDGET_FIELDS}


class WidgetClient:
    """
    Client for the widget REST service.

    Args:
        config: Service URL, timeout, and optional Basic credentials.
        transport: Pre-built ``requests.Session``; built from ``config``
            when omitted.

    Raises:
        ConfigurationError: ``config.base_url`` is empty or malformed.
    """

    def __init__(self, config: WidgetConfig, transport: requests.Session | None = None):
        if not config.base_url or not is_valid_url(config.base_url):
            raise ConfigurationError(
                f"Client expects a base url (i.e. http://localhost:8080/api), got [{config.base_url}]"
            )
        self.config = config
        self._transport = transport or build_transport(timeout=config.timeout)
        self._auth: AuthStrategy = (
            BasicAuth(config.username, config.password)
            if config.uses_basic_auth
            else NoAuth()
        )

    def create_widget(self, widget: dict) -> dict:
        """Create a widget and return it as stored by the service."""
        validate_new_widget(widget)
        data = self._send(HTTPMethod.POST, "", encode_message(widget))
        return decode_response(data, validate_widget)

    def get_widget(self, widget_id: str) -> dict:
        """
        Fetch one widget by id.

        Raises:
            ApplicationError: The service does not know the id.
        """
        data = self._send(HTTPMethod.GET, self._require_id(widget_id))
        return decode_response(data, validate_widget)

    def update_widget(self, widget_id: str, widget: dict) -> dict:
        """Replace the name/size of an existing widget."""
        validate_new_widget(widget)
        data = self._send(HTTPMethod.POST, self._require_id(widget_id), encode_message(widget))
        return decode_response(data, validate_widget)

    def delete_widget(self, widget_id: str) -> None:
        self._send(HTTPMethod.DELETE, self._require_id(widget_id))

    @staticmethod
    def _require_id(widget_id: str) -> str:
        if not widget_id:
            raise ConfigurationError("a widget id is required")
        return str(widget_id)

    def _send(self, method: str, widget_id: str, body: bytes = b"") -> bytes:
        url = build_endpoint_url(self.config.base_url, ENDPOINT_WIDGET, widget_id)
        logger.debug("Widget %s %s", method, url)
        return (
            RequestBuilder(url, self._transport)
            .set_method(method)
            .set_auth(self._auth)
            .add_header(ACCEPT_HEADER, "application/json")
            .set_body(body)
            .set_error_handler(WidgetErrorHandler())
            .build()
            .send()
        )

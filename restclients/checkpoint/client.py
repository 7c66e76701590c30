"""
Check Point management API client.

Every call is a JSON POST to ``<base_url>/<command>``.  Authenticated
commands carry the session id in the ``X-chkp-sid`` header; the
``Authorization`` header is never used, so all requests are built with
:class:`~restclients.rest.auth.NoAuth`.  The session id is cached and
refreshed lazily by :class:`~restclients.checkpoint.session.SessionCache`.

Example::

    client = CheckpointClient(load_checkpoint_config())
    client.create_host({"name": "web-1", "ipv4-address": "192.0.2.10"})
    client.publish()
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import requests

from ..rest.auth import NoAuth
from ..rest.config import ACCEPT_HEADER, HTTPMethod
from ..rest.errors import ConfigurationError, DecodeError
from ..rest.parser import build_endpoint_url, decode_response, encode_message
from ..rest.request import RequestBuilder, is_valid_url
from ..rest.transport import build_transport
from .config import (
    ENDPOINT_ADD_HOST,
    ENDPOINT_DELETE_HOST,
    ENDPOINT_DISCARD,
    ENDPOINT_LOGIN,
    ENDPOINT_LOGOUT,
    ENDPOINT_PUBLISH,
    ENDPOINT_SET_HOST,
    ENDPOINT_SHOW_HOST,
    SESSION_HEADER,
    CheckpointConfig,
)
from .handlers import CheckpointErrorHandler
from .session import SessionCache

logger = logging.getLogger(__name__)


def _object_selector(name: str | None, uid: str | None) -> dict:
    """Build the ``{"name": ...}`` / ``{"uid": ...}`` body identifying an object."""
    if uid:
        return {"uid": uid}
    if name:
        return {"name": name}
    raise ConfigurationError("either a name or a uid is required")


class CheckpointClient:
    """
    Client for the Check Point management web API.

    Args:
        config: Connection, credential, and session settings.
        transport: Pre-built ``requests.Session``; when omitted one is built
            from ``config`` (timeout and TLS verification).
        clock: Time source for the session cache; injectable for tests.

    Raises:
        ConfigurationError: ``config.base_url`` is empty or malformed.
    """

    def __init__(
        self,
        config: CheckpointConfig,
        transport: requests.Session | None = None,
        clock: Callable[[], float] | None = None,
    ):
        if not config.base_url:
            raise ConfigurationError("api client requires a base url")
        if not is_valid_url(config.base_url):
            raise ConfigurationError(f"InvalidURL [{config.base_url}]")

        self.config = config
        self._transport = transport or build_transport(
            timeout=config.timeout,
            verify=config.tls_verify(),
        )
        self._session = SessionCache(
            safety_margin=config.safety_margin,
            clock=clock or time.monotonic,
        )

    @property
    def session_id(self) -> str:
        """Current session identifier (empty when not logged in)."""
        return self._session.session_id

    # -----------------------------------------------------------------------
    # Session management
    # -----------------------------------------------------------------------

    def login(self) -> dict:
        """
        Log in and cache the returned session id and timeout.

        Returns:
            The decoded login response (``sid``, ``uid``, ``session-timeout``, ...).
        """
        response = self._send(ENDPOINT_LOGIN, self.config.login_payload(), authenticated=False)
        self._session.record(*self._session_from(response))
        logger.info("Logged in to %s as %s", self.config.base_url, self.config.user)
        return response

    def logout(self) -> dict:
        """
        End the current session.

        A no-op when there is no session or it has gone stale; the cached id
        is sent as is and never refreshed just to be logged out.
        """
        if self._session.is_stale():
            self._session.invalidate()
            return {}
        response = self._send(ENDPOINT_LOGOUT, {}, session_id=self._session.session_id)
        self._session.invalidate()
        logger.info("Logged out of %s", self.config.base_url)
        return response

    def _refresh_session(self) -> tuple[str, float]:
        response = self._send(ENDPOINT_LOGIN, self.config.login_payload(), authenticated=False)
        return self._session_from(response)

    def _session_from(self, response: Any) -> tuple[str, float]:
        if not isinstance(response, dict):
            return "", 0
        timeout = response.get("session-timeout") or self.config.session_timeout
        try:
            timeout = float(timeout)
        except (TypeError, ValueError) as exc:
            raise DecodeError(f"invalid session-timeout in login response: {timeout!r}") from exc
        return str(response.get("sid") or ""), timeout

    # -----------------------------------------------------------------------
    # Changes
    # -----------------------------------------------------------------------

    def publish(self) -> dict:
        """Publish the changes made in the current session."""
        return self._send(ENDPOINT_PUBLISH, {})

    def discard(self) -> dict:
        """Discard the unpublished changes made in the current session."""
        return self._send(ENDPOINT_DISCARD, {})

    # -----------------------------------------------------------------------
    # Hosts
    # -----------------------------------------------------------------------

    def create_host(self, host: dict) -> dict:
        """Create a host object (``name`` and ``ipv4-address`` at minimum)."""
        return self._send(ENDPOINT_ADD_HOST, host)

    def show_host(self, name: str | None = None, uid: str | None = None) -> dict:
        return self._send(ENDPOINT_SHOW_HOST, _object_selector(name, uid))

    def set_host(self, host: dict) -> dict:
        """Update a host identified by ``name`` or ``uid`` inside ``host``."""
        return self._send(ENDPOINT_SET_HOST, host)

    def delete_host(self, name: str | None = None, uid: str | None = None) -> dict:
        return self._send(ENDPOINT_DELETE_HOST, _object_selector(name, uid))

    # -----------------------------------------------------------------------
    # Transport
    # -----------------------------------------------------------------------

    def _send(
        self,
        endpoint: str,
        message: Any,
        authenticated: bool = True,
        session_id: str = "",
    ) -> Any:
        """
        Encode ``message``, POST it to ``endpoint``, and decode the response.

        When ``authenticated`` is set, a live session id is obtained first
        (logging in if needed) and sent in the session header.  An explicit
        ``session_id`` is sent as given, without consulting the cache.

        Raises:
            ConfigurationError, TransportError, BodyReadError,
            ApplicationError, DecodeError: Whichever step fails first.
        """
        url = build_endpoint_url(self.config.base_url, endpoint)
        builder = (
            RequestBuilder(url, self._transport)
            .set_method(HTTPMethod.POST)
            .set_auth(NoAuth())
            .add_header(ACCEPT_HEADER, "application/json")
            .set_body(encode_message(message))
            .set_error_handler(CheckpointErrorHandler())
        )
        if session_id:
            builder.add_header(SESSION_HEADER, session_id)
        elif authenticated:
            builder.add_header(SESSION_HEADER, self._session.ensure_valid(self._refresh_session))

        data = builder.build().send()
        return decode_response(data)

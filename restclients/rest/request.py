"""
Request construction and execution.

:class:`RequestBuilder` accumulates the declarative parts of an HTTP call
and validates them in :meth:`~RequestBuilder.build`, which returns an
immutable :class:`Request`.  :meth:`Request.send` performs exactly one
exchange over the injected transport and hands the status code and body
to the request's error handler.

Typical use::

    body = RequestBuilder("https://host/api/widget", transport) \\
        .set_auth(NoAuth()) \\
        .set_body(b'{"name": "w"}') \\
        .build() \\
        .send()

No retries and no timeout logic live here: a single failed send is a
single failed operation, and deadlines belong to the transport.
"""

from __future__ import annotations

import logging
from urllib.parse import urlparse

import requests
from requests.structures import CaseInsensitiveDict

from .auth import AuthStrategy
from .config import (
    CONTENT_TYPE_HEADER,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_METHOD,
    HTTPMethod,
)
from .errors import BodyReadError, ConfigurationError, TransportError
from .handlers import DefaultErrorHandler, ErrorHandler

logger = logging.getLogger(__name__)


def is_valid_url(url: str) -> bool:
    """Return ``True`` for an absolute http(s) URL with a host."""
    try:
        parts = urlparse(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class Request:
    """
    A validated, send-ready HTTP request.

    Only :class:`RequestBuilder` should create one.  The wire request is a
    private copy, so nothing done to the builder afterwards can change it.
    """

    __slots__ = ("_transport", "_prepared", "_handler")

    def __init__(
        self,
        transport: requests.Session,
        prepared: requests.PreparedRequest,
        handler: ErrorHandler,
    ):
        object.__setattr__(self, "_transport", transport)
        object.__setattr__(self, "_prepared", prepared)
        object.__setattr__(self, "_handler", handler)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def url(self) -> str:
        return self._prepared.url

    @property
    def method(self) -> str:
        return self._prepared.method

    @property
    def headers(self) -> dict[str, str]:
        """A copy of the outbound headers."""
        return dict(self._prepared.headers)

    @property
    def body(self) -> bytes:
        return self._prepared.body or b""

    @property
    def error_handler(self) -> ErrorHandler:
        return self._handler

    def send(self) -> bytes:
        """
        Execute the HTTP exchange and return the raw response body.

        Returns:
            Response body bytes (``b""`` when the response has no body).

        Raises:
            TransportError: The server could not be reached.
            BodyReadError: The response body could not be read.
            ApplicationError: The error handler judged the response a failure.
        """
        logger.debug("Rest send [%s %s]", self.method, self.url)
        try:
            response = self._transport.send(self._prepared.copy(), stream=True)
        except (requests.RequestException, OSError) as exc:
            logger.warning("Rest send [%s] failed to reach server: %s", self.url, exc)
            raise TransportError(f"Unable to reach {self.url}: {exc}") from exc

        code, data = parse_response(response)

        error = self._handler.handle(code, data)
        if error is not None:
            logger.warning("Rest send [%s] returned %d: %s", self.url, code, error)
            raise error
        return data

    def __repr__(self) -> str:
        return f"Request({self.method} {self.url})"


def parse_response(response: requests.Response) -> tuple[int, bytes]:
    """
    Pull the status code and full body out of a response.

    The response is closed on every exit path, including a failed read.

    Returns:
        Tuple of (status code, body bytes).

    Raises:
        BodyReadError: Reading the body stream failed.
    """
    code = response.status_code
    with response:
        try:
            data = response.content
        except (requests.RequestException, OSError) as exc:
            raise BodyReadError(
                f"Unable to read response body: {exc}", status_code=code
            ) from exc
    return code, data or b""


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

class RequestBuilder:
    """
    Accumulates request parameters and produces a :class:`Request`.

    Every setter returns the builder so calls can be chained; calling a
    setter again overwrites the earlier value.  Defaults follow the
    services this layer was written for: method POST, content type
    ``application/json``.

    Args:
        url: Target URL; may also be supplied later via :meth:`set_url`.
        transport: A ``requests.Session`` (or anything with a compatible
            ``send(prepared, **kwargs)``).
    """

    def __init__(self, url: str = "", transport: requests.Session | None = None):
        self._url = url
        self._transport = transport
        self._method = DEFAULT_METHOD
        self._auth: AuthStrategy | None = None
        self._content_type = DEFAULT_CONTENT_TYPE
        self._headers: CaseInsensitiveDict = CaseInsensitiveDict()
        self._handler: ErrorHandler | None = None
        self._body = b""

    def set_url(self, url: str) -> RequestBuilder:
        self._url = url
        return self

    def set_transport(self, transport: requests.Session) -> RequestBuilder:
        self._transport = transport
        return self

    def set_method(self, method: str) -> RequestBuilder:
        self._method = str(method).upper()
        return self

    def set_auth(self, auth: AuthStrategy) -> RequestBuilder:
        self._auth = auth
        return self

    def set_content_type(self, content_type: str) -> RequestBuilder:
        """Shortcut for the ``Content-Type`` header; an explicit header wins."""
        self._content_type = content_type
        return self

    def add_header(self, key: str, value: str) -> RequestBuilder:
        """Set one header; keys are case-insensitive and an empty key is ignored."""
        if key:
            self._headers[key] = value
        return self

    def set_error_handler(self, handler: ErrorHandler) -> RequestBuilder:
        self._handler = handler
        return self

    def set_body(self, body: bytes | str | None) -> RequestBuilder:
        """Set the message body; ``str`` is UTF-8 encoded and ``None`` clears it."""
        if body is None:
            body = b""
        elif isinstance(body, str):
            body = body.encode("utf-8")
        elif not isinstance(body, (bytes, bytearray, memoryview)):
            raise ConfigurationError(
                f"message body must be bytes or str, not {type(body).__name__}"
            )
        self._body = bytes(body)
        return self

    def validate(self) -> None:
        """
        Check that every required part is present.

        Raises:
            ConfigurationError: Describing the first missing or invalid part.
        """
        if self._transport is None:
            raise ConfigurationError("http transport not set")
        if self._auth is None:
            raise ConfigurationError("auth is not set")
        if not self._url:
            raise ConfigurationError("a URL is not set")
        if not is_valid_url(self._url):
            raise ConfigurationError(f"InvalidURL [{self._url}]")
        if self._method not in HTTPMethod.ALL:
            raise ConfigurationError(f"unsupported http method [{self._method}]")
        if self._method in HTTPMethod.REQUIRES_BODY and not self._body:
            raise ConfigurationError(
                f"an http [{self._method}] request requires a message body"
            )

    def build(self) -> Request:
        """
        Validate the accumulated parts and return a send-ready :class:`Request`.

        Authentication is applied first, then the content type, then the
        explicit headers, so an explicit header wins over both.

        Raises:
            ConfigurationError: A required part is missing or invalid.
        """
        self.validate()
        handler = self._handler or DefaultErrorHandler()

        wire = requests.Request(
            method=self._method,
            url=self._url,
            headers=CaseInsensitiveDict(),
            data=self._body or None,
        )
        self._auth.apply(wire)
        wire.headers[CONTENT_TYPE_HEADER] = self._content_type
        for key, value in self._headers.items():
            wire.headers[key] = value

        try:
            prepared = wire.prepare()
        except (requests.RequestException, ValueError) as exc:
            raise ConfigurationError(f"InvalidURL [{self._url}]: {exc}") from exc

        return Request(self._transport, prepared, handler)

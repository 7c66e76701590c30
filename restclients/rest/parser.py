"""
Message encoding, response decoding, and endpoint URL construction.

No I/O occurs here.  Clients serialize their payloads with
:func:`encode_message`, join endpoints with :func:`build_endpoint_url`, and
turn response bytes into their own structures with :func:`decode_response`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from .errors import ConfigurationError, DecodeError
from .request import is_valid_url

logger = logging.getLogger(__name__)


def build_endpoint_url(base_url: str, path: str, resource_id: str = "") -> str:
    """
    Join a service base URL, a relative path, and an optional resource id.

    Args:
        base_url: Service root, e.g. ``'https://mgmt/web_api/v1.3'``.
        path: Relative endpoint, e.g. ``'add-host'`` or ``'widget'``.
        resource_id: Appended after a ``/`` when non-empty.

    Returns:
        ``base_url/path`` or ``base_url/path/resource_id``.

    Raises:
        ConfigurationError: Base URL empty or the result is not a valid URL.
    """
    if not base_url:
        raise ConfigurationError("api client requires a base url")

    url = f"{base_url}/{path}"
    if resource_id:
        url = f"{url}/{resource_id}"

    if not is_valid_url(url):
        raise ConfigurationError(f"InvalidEndpointURL [{url}]")
    logger.debug("Built endpoint: %s", url)
    return url


def encode_message(message: Any) -> bytes:
    """
    Serialize a payload to compact JSON bytes.

    Raises:
        ConfigurationError: The payload is not JSON-serializable.
    """
    try:
        encoded = json.dumps(message, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Unable to create json message. {exc}") from exc
    return encoded


def decode_response(data: bytes, into: Callable[[Any], Any] | None = None) -> Any:
    """
    Decode a JSON response body, optionally into a caller-supplied structure.

    Args:
        data: Raw response bytes from :meth:`Request.send`.
        into: Callable receiving the parsed JSON and returning the caller's
            structure (a dataclass, a validator, ...).  It signals a mismatch
            by raising ``TypeError``, ``ValueError``, ``KeyError``, or
            :class:`DecodeError`.

    Returns:
        The parsed JSON, or ``into(parsed)`` when ``into`` is given.

    Raises:
        DecodeError: The body is not JSON or does not fit ``into``.
    """
    try:
        parsed = json.loads(data)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"failed to transform response message. {exc}") from exc

    if into is None:
        return parsed
    try:
        return into(parsed)
    except DecodeError:
        raise
    except (TypeError, ValueError, KeyError) as exc:
        raise DecodeError(f"failed to transform response message. {exc}") from exc

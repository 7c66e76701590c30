"""
Construction of the HTTP transport injected into builders.

The request layer never configures TLS, pooling, or timeouts itself; the
client that owns a transport builds it here once and hands it to every
:class:`~restclients.rest.request.RequestBuilder`.
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter

from .config import DEFAULT_POOL_SIZE, DEFAULT_TIMEOUT_SECONDS


class TimeoutHTTPAdapter(HTTPAdapter):
    """HTTPAdapter that applies a default timeout to every send."""

    def __init__(self, *args, timeout: float = DEFAULT_TIMEOUT_SECONDS, **kwargs):
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def build_transport(
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    verify: bool | str = True,
    pool_size: int = DEFAULT_POOL_SIZE,
) -> requests.Session:
    """
    Build a ``requests.Session`` ready for injection into a builder.

    Args:
        timeout: Seconds applied to every request sent over the session.
        verify: ``True`` for the system CA store, a path to a CA bundle
            (e.g. a self-signed management server certificate), or ``False``
            to skip certificate verification.
        pool_size: Connections kept alive per host.

    Returns:
        Configured session with the adapter mounted for http and https.
    """
    adapter = TimeoutHTTPAdapter(
        timeout=timeout,
        pool_connections=pool_size,
        pool_maxsize=pool_size,
    )
    session = requests.Session()
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify
    return session

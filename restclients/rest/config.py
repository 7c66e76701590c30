"""
Constants shared by the request layer.

Header names, default content type, and the status codes the default
error handler accepts all live here so the builder and the strategies
agree on them.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# HTTP methods
# ---------------------------------------------------------------------------

class HTTPMethod:
    """HTTP methods a RequestBuilder accepts."""

    GET = "GET"
    DELETE = "DELETE"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"

    ALL: frozenset[str] = frozenset({GET, DELETE, PATCH, POST, PUT})
    # Methods that must carry a message body
    REQUIRES_BODY: frozenset[str] = frozenset({POST, PUT})


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------

AUTHORIZATION_HEADER = "Authorization"
CONTENT_TYPE_HEADER = "Content-Type"
ACCEPT_HEADER = "Accept"

DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_METHOD = HTTPMethod.POST

# ---------------------------------------------------------------------------
# Response handling
# ---------------------------------------------------------------------------

DEFAULT_SUCCESS_CODES: frozenset[int] = frozenset({200, 201})

# ---------------------------------------------------------------------------
# Transport defaults
# ---------------------------------------------------------------------------

DEFAULT_POOL_SIZE: int = 100       # idle connections kept per host
DEFAULT_TIMEOUT_SECONDS: float = 20.0

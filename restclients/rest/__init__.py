"""
restclients.rest — generic request construction and execution layer.

Module layout
-------------
config.py     — HTTP methods, header names, default content type, success codes
errors.py     — RestError taxonomy (configuration, transport, body read,
                application, decode)
auth.py       — NoAuth / BasicAuth / BearerAuth strategies
handlers.py   — ErrorHandler base and DefaultErrorHandler
request.py    — RequestBuilder and the immutable Request it builds
transport.py  — build_transport(): requests.Session with timeout/TLS/pool
parser.py     — endpoint URL joining, JSON encode/decode

Public interface
----------------
Build and send one request:
    RequestBuilder(url, transport).set_auth(NoAuth()).set_body(b"...").build().send()

Create a transport:
    build_transport(timeout=20, verify=True)
"""

from .auth import AuthStrategy, BasicAuth, BearerAuth, NoAuth
from .config import HTTPMethod
from .errors import (
    ApplicationError,
    BodyReadError,
    ConfigurationError,
    DecodeError,
    RestError,
    TransportError,
)
from .handlers import DefaultErrorHandler, ErrorHandler
from .parser import build_endpoint_url, decode_response, encode_message
from .request import Request, RequestBuilder
from .transport import build_transport

__all__ = [
    # Builder / request
    "RequestBuilder",
    "Request",
    "HTTPMethod",
    "build_transport",
    # Strategies
    "AuthStrategy",
    "NoAuth",
    "BasicAuth",
    "BearerAuth",
    "ErrorHandler",
    "DefaultErrorHandler",
    # Messages
    "build_endpoint_url",
    "encode_message",
    "decode_response",
    # Errors
    "RestError",
    "ConfigurationError",
    "TransportError",
    "BodyReadError",
    "ApplicationError",
    "DecodeError",
]

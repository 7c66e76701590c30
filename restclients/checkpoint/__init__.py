"""
restclients.checkpoint — Check Point management API client.

Module layout
-------------
config.py    — endpoints, session header, CheckpointConfig, env loading
handlers.py  — CheckpointErrorHandler (structured error bodies)
session.py   — SessionCache: lazily refreshed, TTL-bound session id
client.py    — CheckpointClient: login/logout, hosts, publish/discard
"""

from .client import CheckpointClient
from .config import CheckpointConfig, load_checkpoint_config
from .handlers import CheckpointErrorHandler
from .session import SessionCache

__all__ = [
    "CheckpointClient",
    "CheckpointConfig",
    "load_checkpoint_config",
    "CheckpointErrorHandler",
    "SessionCache",
]

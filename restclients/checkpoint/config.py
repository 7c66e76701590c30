"""
Check Point management API configuration: endpoints, session header,
session timing, and the client configuration loaded from the environment.

ENVIRONMENT VARIABLES READ BY load_checkpoint_config():
    CHECKPOINT_BASEURL       — e.g. https://mgmt.example.net/web_api/v1.3 (required)
    CHECKPOINT_USER          — administrator user name
    CHECKPOINT_PASSWORD      — administrator password
    CHECKPOINT_DOMAIN        — domain to log in to (multi-domain servers)
    CHECKPOINT_CERT_PATH     — CA bundle for a self-signed management certificate
    CHECKPOINT_INSECURE_SSL  — 'true' to skip certificate verification
    CHECKPOINT_TIMEOUT       — transport timeout in seconds
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from ..rest.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

ENDPOINT_LOGIN = "login"
ENDPOINT_LOGOUT = "logout"
ENDPOINT_PUBLISH = "publish"
ENDPOINT_DISCARD = "discard"
ENDPOINT_ADD_HOST = "add-host"
ENDPOINT_SHOW_HOST = "show-host"
ENDPOINT_SET_HOST = "set-host"
ENDPOINT_DELETE_HOST = "delete-host"

# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

# Authenticated calls carry the session id here, never in Authorization
SESSION_HEADER = "X-chkp-sid"

DEFAULT_SESSION_TIMEOUT: int = 600       # seconds requested at login
DEFAULT_SAFETY_MARGIN: float = 5.0       # refresh this long before expiry
DEFAULT_TIMEOUT_SECONDS: float = 20.0    # transport timeout


@dataclass(frozen=True)
class CheckpointConfig:
    """
    Everything a :class:`~restclients.checkpoint.client.CheckpointClient`
    needs, fixed at construction time.

    ``cert_path`` and ``insecure`` decide TLS verification; ``safety_margin``
    is how long before the declared session timeout the cached session is
    treated as stale.
    """

    base_url: str
    user: str = ""
    password: str = ""
    domain: str = ""
    cert_path: str = ""
    insecure: bool = False
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    safety_margin: float = DEFAULT_SAFETY_MARGIN
    session_timeout: int = DEFAULT_SESSION_TIMEOUT
    continue_last_session: bool = True
    enter_last_published_session: bool = False
    session_name: str = ""
    session_description: str = ""
    session_comments: str = ""

    def tls_verify(self) -> bool | str:
        """Value for ``requests.Session.verify``."""
        if self.insecure:
            return False
        return self.cert_path or True

    def login_payload(self) -> dict:
        """Build the ``login`` request body; empty optional fields are omitted."""
        payload: dict = {"user": self.user, "password": self.password}
        optional = {
            "domain": self.domain,
            "continue-last-session": self.continue_last_session,
            "enter-last-published-session": self.enter_last_published_session,
            "session-name": self.session_name,
            "session-descriptions": self.session_description,
            "session-comments": self.session_comments,
            "session-timeout": self.session_timeout,
        }
        payload.update({key: value for key, value in optional.items() if value})
        return payload


def _env_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def load_checkpoint_config(environ: Mapping[str, str] | None = None) -> CheckpointConfig:
    """
    Build a :class:`CheckpointConfig` from environment variables.

    Args:
        environ: Mapping to read from; defaults to ``os.environ``.

    Raises:
        ConfigurationError: ``CHECKPOINT_BASEURL`` is unset or a numeric
            value cannot be parsed.
    """
    env = os.environ if environ is None else environ

    base_url = env.get("CHECKPOINT_BASEURL", "").rstrip("/")
    if not base_url:
        raise ConfigurationError(
            "Check Point base url not found. Set the 'CHECKPOINT_BASEURL' "
            "environment variable."
        )

    try:
        timeout = float(env.get("CHECKPOINT_TIMEOUT") or DEFAULT_TIMEOUT_SECONDS)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid CHECKPOINT_TIMEOUT: {exc}") from exc

    return CheckpointConfig(
        base_url=base_url,
        user=env.get("CHECKPOINT_USER", ""),
        password=env.get("CHECKPOINT_PASSWORD", ""),
        domain=env.get("CHECKPOINT_DOMAIN", ""),
        cert_path=env.get("CHECKPOINT_CERT_PATH", ""),
        insecure=_env_flag(env.get("CHECKPOINT_INSECURE_SSL")),
        timeout=timeout,
    )

"""
Widget service configuration.

ENVIRONMENT VARIABLES READ BY load_widget_config():
    SERVICE_BASEURL   — e.g. http://localhost:8080/api (required)
    WIDGET_USERNAME   — Basic auth user (optional)
    WIDGET_PASSWORD   — Basic auth password (optional)
    WIDGET_TIMEOUT    — transport timeout in seconds
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from ..rest.errors import ConfigurationError

ENDPOINT_WIDGET = "widget"

DEFAULT_TIMEOUT_SECONDS: float = 2.0
EXAMPLE_BASE_URL = "http://localhost:8080/api"

# Fields every widget returned by the service must carry
REQUIRED_WIDGET_FIELDS: tuple[str, ...] = ("id", "uid", "name")
WIDGET_FIELDS: frozenset[str] = frozenset({"id", "uid", "name", "size"})


@dataclass(frozen=True)
class WidgetConfig:
    base_url: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    username: str = ""
    password: str = ""

    @property
    def uses_basic_auth(self) -> bool:
        return bool(self.username and self.password)


def load_widget_config(environ: Mapping[str, str] | None = None) -> WidgetConfig:
    """
    Build a :class:`WidgetConfig` from environment variables.

    Raises:
        ConfigurationError: ``SERVICE_BASEURL`` is unset or ``WIDGET_TIMEOUT``
            is not a number.
    """
    env = os.environ if environ is None else environ

    base_url = env.get("SERVICE_BASEURL", "").rstrip("/")
    if not base_url:
        raise ConfigurationError(
            f"Client expects a base url (i.e. {EXAMPLE_BASE_URL}). "
            "Set the 'SERVICE_BASEURL' environment variable."
        )
    try:
        timeout = float(env.get("WIDGET_TIMEOUT") or DEFAULT_TIMEOUT_SECONDS)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid WIDGET_TIMEOUT: {exc}") from exc

    return WidgetConfig(
        base_url=base_url,
        timeout=timeout,
        username=env.get("WIDGET_USERNAME", ""),
        password=env.get("WIDGET_PASSWORD", ""),
    )

"""
Authentication strategies applied to outbound requests.

A strategy receives the ``requests.Request`` under construction and either
sets or removes its ``Authorization`` header.  Strategies hold only their
credentials and are immutable once constructed, so one instance may be
shared by any number of builders.
"""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod

import requests

from .config import AUTHORIZATION_HEADER


class AuthStrategy(ABC):
    """Decides how a request is credentialed."""

    __slots__ = ()

    @abstractmethod
    def apply(self, request: requests.Request) -> None:
        """Mutate ``request.headers`` to carry (or explicitly drop) credentials."""


class NoAuth(AuthStrategy):
    """
    Explicitly unauthenticated.

    Removes any ``Authorization`` header already present, so applying it
    once or many times leaves the request with no credential header.
    """

    __slots__ = ()

    def apply(self, request: requests.Request) -> None:
        if not request.headers:
            return
        target = AUTHORIZATION_HEADER.lower()
        for key in [k for k in request.headers if k.lower() == target]:
            del request.headers[key]

    def __repr__(self) -> str:
        return "NoAuth()"


class BasicAuth(AuthStrategy):
    """HTTP Basic authentication from a user name and password."""

    __slots__ = ("_user", "_password")

    def __init__(self, user: str, password: str):
        object.__setattr__(self, "_user", user)
        object.__setattr__(self, "_password", password)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def user(self) -> str:
        return self._user

    def token(self) -> str:
        """Return ``base64(user:password)``."""
        raw = f"{self._user}:{self._password}".encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    def apply(self, request: requests.Request) -> None:
        request.headers[AUTHORIZATION_HEADER] = f"Basic {self.token()}"

    def __repr__(self) -> str:
        return f"BasicAuth(user={self._user!r})"


class BearerAuth(AuthStrategy):
    """Bearer authentication from an opaque token."""

    __slots__ = ("_token",)

    def __init__(self, token: str):
        object.__setattr__(self, "_token", token)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def apply(self, request: requests.Request) -> None:
        request.headers[AUTHORIZATION_HEADER] = f"Bearer {self._token}"

    def __repr__(self) -> str:
        return "BearerAuth(token=***)"

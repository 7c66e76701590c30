"""
Session identifier cache with lazy, TTL-bound refresh.

The cache is in one of two states: no session (empty id), or a live session
with the time at which it must be refreshed.  :meth:`SessionCache.ensure_valid`
logs in when there is no session or the refresh time has been reached, so
each authenticated call reuses a live session instead of logging in again.

A lock guards refresh and reads, so concurrent callers sharing one client
trigger at most one login per expiry and never see a torn id/expiry pair.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from ..rest.errors import DecodeError
from .config import DEFAULT_SAFETY_MARGIN

logger = logging.getLogger(__name__)

# login() returns (session id, declared session timeout in seconds)
LoginFunc = Callable[[], tuple[str, float]]


class SessionCache:
    """
    Owns one session identifier and the time it goes stale.

    Args:
        safety_margin: Seconds subtracted from the declared timeout so a
            session is never used right at its expiry.
        clock: Monotonic time source; injectable for tests.
    """

    def __init__(
        self,
        safety_margin: float = DEFAULT_SAFETY_MARGIN,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.safety_margin = safety_margin
        self._clock = clock
        self._lock = threading.RLock()
        self._session_id = ""
        self._refresh_at = 0.0

    @property
    def session_id(self) -> str:
        with self._lock:
            return self._session_id

    @property
    def refresh_at(self) -> float:
        with self._lock:
            return self._refresh_at

    @property
    def has_session(self) -> bool:
        with self._lock:
            return bool(self._session_id)

    def is_stale(self) -> bool:
        """``True`` when there is no session or its refresh time has passed."""
        with self._lock:
            return not self._session_id or self._clock() >= self._refresh_at

    def record(self, session_id: str, timeout: float) -> None:
        """
        Store a freshly issued session.

        Raises:
            DecodeError: ``session_id`` is empty.
        """
        if not session_id:
            raise DecodeError("unable to obtain the session identifier")
        with self._lock:
            self._session_id = session_id
            self._refresh_at = self._clock() + float(timeout) - self.safety_margin
        logger.info("Session refreshed; valid for %ss", timeout)

    def invalidate(self) -> None:
        """Forget the current session; the next ensure_valid() logs in."""
        with self._lock:
            self._session_id = ""
            self._refresh_at = 0.0

    def ensure_valid(self, login: LoginFunc) -> str:
        """
        Return a live session id, logging in first when needed.

        Args:
            login: Performs the login call and returns ``(session_id, timeout)``.
                Its exceptions propagate unchanged; there is no retry.

        Returns:
            The current session identifier.
        """
        with self._lock:
            if self.is_stale():
                logger.debug("Session missing or stale; logging in")
                session_id, timeout = login()
                self.record(session_id, timeout)
            return self._session_id

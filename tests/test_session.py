"""
Unit tests for restclients/checkpoint/session.py.

Covers the two-state session cache: first use logs in, a live session is
reused, the refresh boundary (declared timeout minus safety margin), login
failures surfacing verbatim, and single login under concurrent callers.
"""

from __future__ import annotations

import threading
import time
from unittest.mock import MagicMock

import pytest

from restclients.checkpoint.session import SessionCache
from restclients.rest import ApplicationError, DecodeError, TransportError


def _cache(clock, margin: float = 5) -> SessionCache:
    return SessionCache(safety_margin=margin, clock=clock)


class TestInitialState:

    def test_starts_without_session(self, clock):
        cache = _cache(clock)
        assert cache.session_id == ""
        assert not cache.has_session
        assert cache.is_stale()

    def test_first_ensure_valid_logs_in(self, clock):
        cache = _cache(clock)
        login = MagicMock(return_value=("sid-1", 600))
        assert cache.ensure_valid(login) == "sid-1"
        login.assert_called_once_with()
        assert cache.has_session


class TestRefreshBoundary:

    def test_refresh_time_is_timeout_minus_margin(self, clock):
        cache = _cache(clock)
        cache.record("sid-1", 600)
        assert cache.refresh_at == clock.now + 595

    def test_live_session_reused_at_500s(self, clock):
        cache = _cache(clock)
        login = MagicMock(side_effect=[("sid-1", 600), ("sid-2", 600)])
        cache.ensure_valid(login)
        clock.advance(500)
        assert cache.ensure_valid(login) == "sid-1"
        assert login.call_count == 1

    def test_just_before_boundary_still_live(self, clock):
        cache = _cache(clock)
        login = MagicMock(side_effect=[("sid-1", 600), ("sid-2", 600)])
        cache.ensure_valid(login)
        clock.advance(594.9)
        assert cache.ensure_valid(login) == "sid-1"

    @pytest.mark.parametrize("elapsed", [595, 596, 600, 3600])
    def test_refreshes_at_or_after_boundary(self, clock, elapsed):
        cache = _cache(clock)
        login = MagicMock(side_effect=[("sid-1", 600), ("sid-2", 600)])
        cache.ensure_valid(login)
        clock.advance(elapsed)
        assert cache.ensure_valid(login) == "sid-2"
        assert login.call_count == 2

    def test_new_expiry_measured_from_refresh(self, clock):
        cache = _cache(clock)
        login = MagicMock(side_effect=[("sid-1", 600), ("sid-2", 60), ("sid-3", 600)])
        cache.ensure_valid(login)
        clock.advance(595)
        cache.ensure_valid(login)
        clock.advance(54)
        assert cache.ensure_valid(login) == "sid-2"
        clock.advance(1)
        assert cache.ensure_valid(login) == "sid-3"

    def test_custom_margin(self, clock):
        cache = _cache(clock, margin=30)
        cache.record("sid-1", 600)
        clock.advance(570)
        assert cache.is_stale()


class TestLoginFailures:

    def test_login_error_propagates_verbatim(self, clock):
        cache = _cache(clock)
        failure = ApplicationError(403, "Authentication to server failed")
        login = MagicMock(side_effect=failure)
        with pytest.raises(ApplicationError) as excinfo:
            cache.ensure_valid(login)
        assert excinfo.value is failure
        assert not cache.has_session

    def test_failed_refresh_keeps_no_retry(self, clock):
        cache = _cache(clock)
        login = MagicMock(side_effect=TransportError("down"))
        with pytest.raises(TransportError):
            cache.ensure_valid(login)
        assert login.call_count == 1

    def test_empty_session_id_rejected(self, clock):
        cache = _cache(clock)
        with pytest.raises(DecodeError, match="session identifier"):
            cache.ensure_valid(MagicMock(return_value=("", 600)))
        assert not cache.has_session


class TestInvalidate:

    def test_invalidate_forces_login(self, clock):
        cache = _cache(clock)
        login = MagicMock(side_effect=[("sid-1", 600), ("sid-2", 600)])
        cache.ensure_valid(login)
        cache.invalidate()
        assert cache.session_id == ""
        assert cache.ensure_valid(login) == "sid-2"


class TestConcurrency:

    def test_concurrent_callers_share_one_login(self):
        cache = SessionCache(safety_margin=5)
        calls = []

        def slow_login():
            calls.append(1)
            time.sleep(0.05)
            return f"sid-{len(calls)}", 600

        barrier = threading.Barrier(8)
        results = []

        def worker():
            barrier.wait()
            results.append(cache.ensure_valid(slow_login))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert results == ["sid-1"] * 8

"""Tests for graceful shutdown tracking."""

import asyncio

import pytest

from src.taskboard.core.shutdown import GOING_AWAY, RequestTracker

pytestmark = pytest.mark.unit


class FakeSocket:
    def __init__(self, fail: bool = False):
        self.closed_with: int | None = None
        self.fail = fail

    async def close(self, code: int = 1000) -> None:
        if self.fail:
            raise RuntimeError("already disconnected")
        self.closed_with = code


class TestRequestTracking:
    async def test_request_tracking(self):
        tracker = RequestTracker()

        assert tracker.in_flight_count == 0
        assert not tracker.is_shutting_down

        async with tracker.track_request():
            assert tracker.in_flight_count == 1

        assert tracker.in_flight_count == 0

    async def test_counter_released_when_request_raises(self):
        tracker = RequestTracker()

        with pytest.raises(ValueError):
            async with tracker.track_request():
                raise ValueError("handler failed")

        assert tracker.in_flight_count == 0

    async def test_concurrent_requests(self):
        tracker = RequestTracker()
        release = asyncio.Event()

        async def request():
            async with tracker.track_request():
                await release.wait()

        tasks = [asyncio.create_task(request()) for _ in range(3)]
        await asyncio.sleep(0)
        assert tracker.in_flight_count == 3

        release.set()
        await asyncio.gather(*tasks)
        assert tracker.in_flight_count == 0


class TestDrain:
    async def test_drains_immediately_when_idle(self):
        tracker = RequestTracker()

        await tracker.start_shutdown()

        assert tracker.is_shutting_down
        assert await tracker.wait_for_drain(timeout=1.0) is True

    async def test_waits_for_in_flight_requests(self):
        tracker = RequestTracker()
        release = asyncio.Event()

        async def request():
            async with tracker.track_request():
                await release.wait()

        task = asyncio.create_task(request())
        await asyncio.sleep(0)
        await tracker.start_shutdown()

        drain = asyncio.create_task(tracker.wait_for_drain(timeout=1.0))
        await asyncio.sleep(0.01)
        assert not drain.done()

        release.set()
        assert await drain is True
        await task

    async def test_timeout_reports_failure(self):
        tracker = RequestTracker()
        release = asyncio.Event()

        async def request():
            async with tracker.track_request():
                await release.wait()

        task = asyncio.create_task(request())
        await asyncio.sleep(0)

        assert await tracker.wait_for_drain(timeout=0.05) is False
        assert tracker.in_flight_count == 1

        release.set()
        await task


class TestSockets:
    async def test_socket_is_tracked_only_inside_session(self):
        tracker = RequestTracker()
        socket = FakeSocket()

        async with tracker.track_socket(socket):
            assert tracker.open_socket_count == 1

        assert tracker.open_socket_count == 0

    async def test_close_sockets_uses_going_away(self):
        tracker = RequestTracker()
        first, second = FakeSocket(), FakeSocket()

        async with tracker.track_socket(first), tracker.track_socket(second):
            closed = await tracker.close_sockets()

        assert closed == 2
        assert first.closed_with == GOING_AWAY
        assert second.closed_with == GOING_AWAY
        assert tracker.open_socket_count == 0

    async def test_close_failure_does_not_stop_others(self):
        tracker = RequestTracker()
        gone, alive = FakeSocket(fail=True), FakeSocket()

        async with tracker.track_socket(gone), tracker.track_socket(alive):
            closed = await tracker.close_sockets()

        assert closed == 2
        assert alive.closed_with == GOING_AWAY

    async def test_reset_clears_state(self):
        tracker = RequestTracker()
        await tracker.start_shutdown()
        async with tracker.track_socket(FakeSocket()):
            tracker.reset()
            assert tracker.open_socket_count == 0

        assert not tracker.is_shutting_down
        assert tracker.in_flight_count == 0

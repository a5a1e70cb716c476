"""Connection tracking for graceful shutdown.

HTTP requests finish on their own, so shutdown waits for them. WebSocket
sessions never do; once requests have drained they are closed with 1001
(going away) and clients reconnect to another worker.
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from starlette.websockets import WebSocket

from src.taskboard.core.logging import get_logger

logger = get_logger(__name__)

GOING_AWAY = 1001


class RequestTracker:
    def __init__(self) -> None:
        self._in_flight = 0
        self._shutting_down = False
        self._sockets: set[WebSocket] = set()
        self._idle = asyncio.Condition()

    @property
    def is_shutting_down(self) -> bool:
        return self._shutting_down

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    @property
    def open_socket_count(self) -> int:
        return len(self._sockets)

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        async with self._idle:
            self._in_flight += 1
        try:
            yield
        finally:
            async with self._idle:
                self._in_flight -= 1
                if self._in_flight == 0:
                    self._idle.notify_all()

    @asynccontextmanager
    async def track_socket(self, websocket: WebSocket) -> AsyncGenerator[None]:
        """Hold an accepted WebSocket for the lifetime of its session."""
        self._sockets.add(websocket)
        try:
            yield
        finally:
            self._sockets.discard(websocket)

    async def start_shutdown(self) -> None:
        self._shutting_down = True
        logger.info(
            "Shutdown started",
            in_flight=self._in_flight,
            open_sockets=len(self._sockets),
        )

    async def wait_for_drain(self, timeout: float) -> bool:
        """Wait until no HTTP request is in flight.

        Returns:
            True if requests drained within timeout, False otherwise
        """
        try:
            async with asyncio.timeout(timeout):
                async with self._idle:
                    await self._idle.wait_for(lambda: self._in_flight == 0)
        except TimeoutError:
            logger.warning("Shutdown drain timed out", timeout=timeout, in_flight=self._in_flight)
            return False
        logger.info("All requests drained")
        return True

    async def close_sockets(self, code: int = GOING_AWAY) -> int:
        """Close every tracked WebSocket. Returns how many were closed."""
        sockets = list(self._sockets)
        for websocket in sockets:
            try:
                await websocket.close(code=code)
            except Exception as e:
                # Peer already gone
                logger.debug("WebSocket close failed", error=str(e))
        self._sockets.clear()
        return len(sockets)

    def reset(self) -> None:
        """Reset tracker state. For testing only."""
        self._in_flight = 0
        self._shutting_down = False
        self._sockets.clear()
        self._idle = asyncio.Condition()


request_tracker = RequestTracker()

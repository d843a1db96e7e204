"""In-flight tracking for graceful shutdown.

HTTP requests are counted and drained. Realtime sockets are counted too, but
they are long-lived, so shutdown only refuses new ones and reports how many
were still open.
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.hotel.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    def __init__(self) -> None:
        self._in_flight = 0
        self._open_sockets = 0
        self._shutting_down = False
        self._lock = asyncio.Lock()
        self._drained = asyncio.Event()

    @property
    def is_shutting_down(self) -> bool:
        return self._shutting_down

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    @property
    def open_sockets(self) -> int:
        return self._open_sockets

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        async with self._lock:
            self._in_flight += 1
        try:
            yield
        finally:
            async with self._lock:
                self._in_flight -= 1
                if self._shutting_down and self._in_flight == 0:
                    self._drained.set()

    @asynccontextmanager
    async def track_socket(self) -> AsyncGenerator[None]:
        self._open_sockets += 1
        try:
            yield
        finally:
            self._open_sockets -= 1

    async def start_shutdown(self) -> None:
        logger.info(
            "Draining before shutdown",
            in_flight=self._in_flight,
            open_sockets=self._open_sockets,
        )
        self._shutting_down = True
        async with self._lock:
            if self._in_flight == 0:
                self._drained.set()

    async def wait_for_drain(self, timeout: float) -> bool:
        """Wait for in-flight requests; False when ``timeout`` ran out first."""
        try:
            await asyncio.wait_for(self._drained.wait(), timeout=timeout)
        except TimeoutError:
            logger.warning("Drain timed out", timeout=timeout, in_flight=self._in_flight)
            return False
        logger.info("All requests drained")
        return True

    def reset(self) -> None:
        """Reset tracker state. For testing only."""
        self._in_flight = 0
        self._open_sockets = 0
        self._shutting_down = False
        self._drained = asyncio.Event()


request_tracker = RequestTracker()

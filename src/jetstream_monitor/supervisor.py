"""
Connection supervisor — connect, stream, reconnect, shut down.

State machine:
  DISCONNECTED -> CONNECTING -> STREAMING -> RECONNECTING | SHUTTING_DOWN -> TERMINATED

Every disconnect (failed connect, transport error, clean close) retries after
the same flat delay, forever. Only request_shutdown() ends the loop.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

from jetstream_monitor.errors import ConnectionError, DecodeError
from jetstream_monitor.router import Router
from jetstream_monitor.sinks import EventSink
from jetstream_monitor.transport.envelope import decode_envelope
from jetstream_monitor.transport.reader import FrameReader
from jetstream_monitor.transport.websocket import DEFAULT_OPEN_TIMEOUT, DEFAULT_URL, Session, connect

RECONNECT_DELAY_S = 5.0

Connector = Callable[[str, float], Awaitable[Session]]
Sleeper = Callable[[float], Awaitable[None]]

logger = logging.getLogger("jetstream_monitor.supervisor")


class State(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    STREAMING = "streaming"
    RECONNECTING = "reconnecting"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


class Supervisor:
    def __init__(
        self,
        sink: EventSink,
        url: str = DEFAULT_URL,
        reconnect_delay: float = RECONNECT_DELAY_S,
        open_timeout: float = DEFAULT_OPEN_TIMEOUT,
        connector: Optional[Connector] = None,
        sleep: Optional[Sleeper] = None,
    ):
        self._url = url
        self._reconnect_delay = reconnect_delay
        self._open_timeout = open_timeout
        self._connector = connector or connect
        self._sleep = sleep or asyncio.sleep
        self._router = Router(sink)
        self._shutdown = asyncio.Event()
        self._state = State.DISCONNECTED

    @property
    def state(self) -> State:
        return self._state

    def request_shutdown(self) -> None:
        """Raise the shutdown signal. Safe to call from a loop signal handler."""
        self._shutdown.set()

    def _set_state(self, state: State) -> None:
        logger.debug("state %s -> %s", self._state.value, state.value)
        self._state = state

    async def run(self) -> None:
        """Run until shutdown is requested. Returns in the TERMINATED state."""
        while True:
            if self._shutdown.is_set():
                self._set_state(State.TERMINATED)
                return

            self._set_state(State.CONNECTING)
            logger.info("connecting to jetstream at %s", self._url)
            try:
                session = await self._connector(self._url, self._open_timeout)
            except ConnectionError as e:
                logger.error("connection error, retrying in %g seconds: %s", self._reconnect_delay, e)
                await self._backoff()
                continue

            logger.info("connected")
            self._set_state(State.STREAMING)
            if await self._stream(session):
                return

            logger.info("connection closed, reconnecting in %g seconds", self._reconnect_delay)
            await self._backoff()

    async def _backoff(self) -> None:
        # Not interruptible; a shutdown raised here is seen at the next attempt.
        self._set_state(State.RECONNECTING)
        await self._sleep(self._reconnect_delay)

    async def _stream(self, session: Session) -> bool:
        """Race the consumer against shutdown. Returns True once terminated."""
        consumer = asyncio.create_task(self._consume(session))
        consumer.add_done_callback(_log_consumer_failure)
        shutdown_wait = asyncio.create_task(self._shutdown.wait())

        await asyncio.wait({consumer, shutdown_wait}, return_when=asyncio.FIRST_COMPLETED)

        if self._shutdown.is_set():
            self._set_state(State.SHUTTING_DOWN)
            logger.info("shutting down")
            await session.close()
            # Abandoned, not joined.
            consumer.cancel()
            self._set_state(State.TERMINATED)
            return True

        shutdown_wait.cancel()
        # A crashed consumer leaves the connection open.
        await session.close()
        return False

    async def _consume(self, session: Session) -> None:
        async for frame in FrameReader(session):
            try:
                envelope = decode_envelope(frame)
            except DecodeError as e:
                logger.error("parse error: %s", e)
                continue
            self._router.route(envelope)


def _log_consumer_failure(task: "asyncio.Task[None]") -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("stream consumer failed", exc_info=exc)

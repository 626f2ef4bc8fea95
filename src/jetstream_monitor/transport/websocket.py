"""
WebSocket connector and session.

One connect attempt per call; retrying is the supervisor's job.
"""

import asyncio
import logging
from typing import Union

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException
from websockets.frames import CloseCode

from jetstream_monitor.errors import ConnectionError, StreamEndedError

DEFAULT_URL = "ws://localhost:6008/subscribe"
DEFAULT_OPEN_TIMEOUT = 10.0

Frame = Union[bytes, str]

logger = logging.getLogger("jetstream_monitor.transport.websocket")


class Session:
    """An open connection to the streaming endpoint."""

    def __init__(self, ws, url: str):
        self._ws = ws
        self.url = url

    async def recv(self) -> Frame:
        """Wait for the next frame. Raises StreamEndedError on close or transport error."""
        try:
            return await self._ws.recv()
        except ConnectionClosed as e:
            raise StreamEndedError(f"connection closed: {e}") from e
        except OSError as e:
            raise StreamEndedError(f"transport error: {e}") from e

    async def close(self) -> None:
        """Send a normal-closure frame and close the transport. Failures are logged."""
        try:
            await self._ws.close(code=CloseCode.NORMAL_CLOSURE)
        except (WebSocketException, OSError) as e:
            logger.error("error closing connection: %s", e)


async def connect(url: str = DEFAULT_URL, open_timeout: float = DEFAULT_OPEN_TIMEOUT) -> Session:
    try:
        ws = await websockets.connect(url, open_timeout=open_timeout)
    except (WebSocketException, OSError, asyncio.TimeoutError) as e:
        raise ConnectionError(f"dial error: {e}", {"url": url}) from e
    return Session(ws, url)

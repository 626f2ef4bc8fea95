"""
Frame reader — turns an open session into a sequence of raw frames.
"""

import logging
from typing import Optional

from jetstream_monitor.errors import StreamEndedError
from jetstream_monitor.transport.websocket import Frame, Session

logger = logging.getLogger("jetstream_monitor.transport.reader")


class FrameReader:
    """Reads frames until the stream ends.

    A transport error and a graceful close both end the stream the same way:
    next() returns None and iteration stops.
    """

    def __init__(self, session: Session):
        self._session = session
        self._ended = False

    @property
    def ended(self) -> bool:
        return self._ended

    async def next(self) -> Optional[Frame]:
        if self._ended:
            return None
        try:
            return await self._session.recv()
        except StreamEndedError as e:
            logger.error("read error: %s", e)
            self._ended = True
            return None

    def __aiter__(self) -> "FrameReader":
        return self

    async def __anext__(self) -> Frame:
        frame = await self.next()
        if frame is None:
            raise StopAsyncIteration
        return frame

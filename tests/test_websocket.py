"""Connector and session against a local WebSocket server."""

import asyncio
import logging
import socket

import pytest
from websockets.asyncio.server import serve
from websockets.exceptions import ConnectionClosedError

from jetstream_monitor import ConnectionError, State, StreamEndedError, Supervisor
from jetstream_monitor.transport.websocket import Session, connect

from fakes import commit_frame, identity_frame


def _free_port() -> int:
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.mark.asyncio
async def test_session_reads_frames_and_closes_normally():
    close_code: asyncio.Future = asyncio.get_running_loop().create_future()

    async def handler(ws):
        await ws.send(identity_frame("alice").decode())
        await ws.wait_closed()
        close_code.set_result(ws.close_code)

    async with serve(handler, "127.0.0.1", 0) as server:
        port = server.sockets[0].getsockname()[1]
        session = await connect(f"ws://127.0.0.1:{port}/subscribe", 5.0)
        frame = await session.recv()
        assert "alice" in frame

        await session.close()
        assert await asyncio.wait_for(close_code, timeout=5.0) == 1000

        with pytest.raises(StreamEndedError):
            await session.recv()


class BrokenCloseConnection:
    def __init__(self, error: Exception):
        self._error = error
        self.close_codes: list[int] = []

    async def close(self, code: int = 1000) -> None:
        self.close_codes.append(code)
        raise self._error


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [
    OSError("broken pipe"),
    ConnectionClosedError(None, None),
])
async def test_close_failure_is_logged_not_raised(caplog, error):
    ws = BrokenCloseConnection(error)
    session = Session(ws, "ws://test/subscribe")

    with caplog.at_level(logging.ERROR, logger="jetstream_monitor.transport.websocket"):
        await session.close()

    assert ws.close_codes == [1000]
    assert any("error closing connection" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_connection_refused_raises_connection_error():
    with pytest.raises(ConnectionError) as exc_info:
        await connect(f"ws://127.0.0.1:{_free_port()}/subscribe", 5.0)
    assert exc_info.value.code == "connection_error"
    assert exc_info.value.__cause__ is not None


@pytest.mark.asyncio
async def test_invalid_uri_raises_connection_error():
    with pytest.raises(ConnectionError):
        await connect("http://not-a-websocket", 5.0)


@pytest.mark.asyncio
async def test_supervisor_against_local_server(sink):
    async def handler(ws):
        await ws.send(commit_frame("app.bsky.feed.post", {"text": "hi"}).decode())
        await ws.send(b"\x00garbage")
        await ws.send(identity_frame("alice").decode())
        # Server closes; the supervisor treats it as a stream end.

    async with serve(handler, "127.0.0.1", 0) as server:
        port = server.sockets[0].getsockname()[1]
        supervisor = None
        delays = []

        async def sleep(delay):
            delays.append(delay)
            supervisor.request_shutdown()

        supervisor = Supervisor(sink, url=f"ws://127.0.0.1:{port}/subscribe", sleep=sleep)
        await asyncio.wait_for(supervisor.run(), timeout=10.0)

    assert sink.labels == ["post", "handle_update"]
    assert delays == [5.0]
    assert supervisor.state == State.TERMINATED

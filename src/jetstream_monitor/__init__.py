"""
jetstream-monitor — tail a Jetstream event feed.

WebSocket client that decodes commit/identity/account envelopes and reports
each event to a sink, reconnecting on every disconnect.
"""

from jetstream_monitor.supervisor import Supervisor, State, RECONNECT_DELAY_S
from jetstream_monitor.router import Router
from jetstream_monitor.sinks import EventSink, ConsoleSink, JsonSink
from jetstream_monitor.config import MonitorConfig
from jetstream_monitor.errors import (
    JetstreamError,
    ConnectionError,
    StreamEndedError,
    DecodeError,
    ExtractionError,
)
from jetstream_monitor.models.envelope import Envelope
from jetstream_monitor.models.events import Kind, Collection, EventLabel
from jetstream_monitor.transport.envelope import decode_envelope

__version__ = "0.1.0"
__all__ = [
    "Supervisor",
    "State",
    "RECONNECT_DELAY_S",
    "Router",
    "EventSink",
    "ConsoleSink",
    "JsonSink",
    "MonitorConfig",
    "JetstreamError",
    "ConnectionError",
    "StreamEndedError",
    "DecodeError",
    "ExtractionError",
    "Envelope",
    "Kind",
    "Collection",
    "EventLabel",
    "decode_envelope",
]

"""
Envelope decoding — one frame in, one Envelope out.
"""

from pydantic import ValidationError

from jetstream_monitor.errors import DecodeError
from jetstream_monitor.models.envelope import Envelope
from jetstream_monitor.transport.websocket import Frame


def decode_envelope(frame: Frame) -> Envelope:
    """Strictly decode a JSON frame. Raises DecodeError on malformed input."""
    try:
        return Envelope.model_validate_json(frame)
    except ValidationError as e:
        raise DecodeError(
            f"failed to unmarshal message: {e.error_count()} validation error(s)",
            {"errors": e.errors(include_url=False, include_input=False)},
        ) from e

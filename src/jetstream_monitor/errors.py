"""
Jetstream monitor error types.

Only connection-level errors reach the supervisor; per-frame errors
(DecodeError, ExtractionError) are contained where the frame is handled.
"""

from typing import Any, Optional


class JetstreamError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ConnectionError(JetstreamError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("connection_error", message, details)


class StreamEndedError(JetstreamError):
    def __init__(self, message: str = "stream ended"):
        super().__init__("stream_ended", message)


class DecodeError(JetstreamError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("decode_error", message, details)


class ExtractionError(JetstreamError):
    def __init__(self, collection: str, message: str):
        super().__init__("extraction_error", message, {"collection": collection})

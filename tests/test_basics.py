"""Basic unit tests for jetstream-monitor package."""

import pytest
from pydantic import ValidationError

from jetstream_monitor import (
    Supervisor,
    Router,
    JetstreamError,
    ConnectionError,
    StreamEndedError,
    DecodeError,
    ExtractionError,
    Collection,
    EventLabel,
    Kind,
    MonitorConfig,
    RECONNECT_DELAY_S,
    __version__,
)


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert Supervisor is not None
    assert Router is not None


def test_error_hierarchy():
    for cls in (ConnectionError, StreamEndedError, DecodeError, ExtractionError):
        assert issubclass(cls, JetstreamError)


def test_error_attributes():
    err = JetstreamError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None

    conn = ConnectionError("dial error", details={"url": "ws://x"})
    assert conn.code == "connection_error"
    assert conn.details == {"url": "ws://x"}

    extraction = ExtractionError(Collection.LIKE, "no subject")
    assert extraction.code == "extraction_error"
    assert extraction.details == {"collection": "app.bsky.feed.like"}


def test_constants():
    assert Kind.COMMIT == "commit"
    assert Collection.POST == "app.bsky.feed.post"
    assert EventLabel.HANDLE_UPDATE == "handle_update"
    assert RECONNECT_DELAY_S == 5.0


def test_config_defaults():
    cfg = MonitorConfig()
    assert cfg.url == "ws://localhost:6008/subscribe"
    assert cfg.reconnect_delay == 5.0
    assert cfg.json_output is False


def test_config_rejects_non_positive_delay():
    with pytest.raises(ValidationError):
        MonitorConfig(reconnect_delay=0)

"""
Monitor configuration. The core never reads the environment; the CLI fills this in.
"""

from pydantic import BaseModel, Field

from jetstream_monitor.supervisor import RECONNECT_DELAY_S
from jetstream_monitor.transport.websocket import DEFAULT_OPEN_TIMEOUT, DEFAULT_URL


class MonitorConfig(BaseModel):
    url: str = DEFAULT_URL
    reconnect_delay: float = Field(default=RECONNECT_DELAY_S, gt=0)
    open_timeout: float = Field(default=DEFAULT_OPEN_TIMEOUT, gt=0)
    log_level: str = "INFO"
    json_output: bool = False

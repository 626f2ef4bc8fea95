"""
Logging setup for the lifecycle loggers (jetstream_monitor.*).
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "INFO", console: Optional[Console] = None) -> None:
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        log_time_format="[%X]",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger("jetstream_monitor")
    root.handlers[:] = [handler]
    root.setLevel(level.upper())
    root.propagate = False

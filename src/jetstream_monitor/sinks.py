"""
Output sinks for routed events.

A sink receives one mapping per reported event. The mapping always carries a
``message`` label (post, like, handle_update, ...); every other key is an
event field.
"""

import json
import sys
import time
from datetime import datetime
from typing import Any, Optional, Protocol, TextIO

from rich.console import Console
from rich.markup import escape


class EventSink(Protocol):
    def record(self, fields: dict[str, Any]) -> None: ...


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str, separators=(",", ":"))


class ConsoleSink:
    """Human-readable output, one line per event."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    def record(self, fields: dict[str, Any]) -> None:
        fields = dict(fields)
        message = fields.pop("message", "")
        stamp = datetime.now().astimezone().isoformat(timespec="seconds")
        parts = [f"[dim]{stamp}[/dim]", "[green]INF[/green]", f"[bold]{escape(message)}[/bold]"]
        for key, value in fields.items():
            parts.append(f"[cyan]{escape(key)}=[/cyan]{escape(_format_value(value))}")
        self._console.print(" ".join(parts), highlight=False, soft_wrap=True)


class JsonSink:
    """One JSON object per line."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream or sys.stdout

    def record(self, fields: dict[str, Any]) -> None:
        line = {"level": "info", "time": int(time.time()), **fields}
        self._stream.write(json.dumps(line, default=str) + "\n")
        self._stream.flush()

"""
Jetstream monitor CLI — `jetstream-monitor` command.

  jetstream-monitor                      Tail the default endpoint
  jetstream-monitor --url ws://host/sub  Tail another endpoint
  jetstream-monitor --json               One JSON object per event on stdout

Ctrl+C (or SIGTERM) sends a normal close frame and exits 0.
"""

import asyncio
import signal

import click
from pydantic import ValidationError
from rich.console import Console

from jetstream_monitor import __version__
from jetstream_monitor.config import MonitorConfig
from jetstream_monitor.log import configure_logging
from jetstream_monitor.sinks import ConsoleSink, EventSink, JsonSink
from jetstream_monitor.supervisor import RECONNECT_DELAY_S, Supervisor
from jetstream_monitor.transport.websocket import DEFAULT_OPEN_TIMEOUT, DEFAULT_URL


def _build_sink(config: MonitorConfig) -> EventSink:
    if config.json_output:
        return JsonSink()
    return ConsoleSink(Console())


async def _monitor(config: MonitorConfig) -> None:
    supervisor = Supervisor(
        _build_sink(config),
        url=config.url,
        reconnect_delay=config.reconnect_delay,
        open_timeout=config.open_timeout,
    )
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, supervisor.request_shutdown)
        except NotImplementedError:
            pass  # Windows: Ctrl+C surfaces as KeyboardInterrupt instead
    await supervisor.run()


def _run(coro):
    return asyncio.run(coro)


@click.command()
@click.version_option(__version__)
@click.option("--url", envvar="JETSTREAM_URL", default=DEFAULT_URL, show_default=True,
              help="Streaming subscription endpoint.")
@click.option("--reconnect-delay", envvar="JETSTREAM_RECONNECT_DELAY", type=float,
              default=RECONNECT_DELAY_S, show_default=True, help="Seconds to wait before reconnecting.")
@click.option("--open-timeout", type=float, default=DEFAULT_OPEN_TIMEOUT, show_default=True,
              help="Seconds to wait for the opening handshake.")
@click.option("--log-level", envvar="JETSTREAM_LOG_LEVEL", default="INFO", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
@click.option("--json-output", "--json", is_flag=True, help="Write events as JSON lines.")
def main(url: str, reconnect_delay: float, open_timeout: float, log_level: str, json_output: bool):
    """Tail a Jetstream event feed and report every event."""
    try:
        config = MonitorConfig(
            url=url,
            reconnect_delay=reconnect_delay,
            open_timeout=open_timeout,
            log_level=log_level,
            json_output=json_output,
        )
    except ValidationError as e:
        raise click.BadParameter(str(e))
    configure_logging(config.log_level)
    try:
        _run(_monitor(config))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()

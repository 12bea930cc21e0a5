"""
Standard-stream transport: one session over stdin/stdout for the life of the process.

Usage:
  JINA_API_KEY=... mcp-jina-reader --transport stdio
"""
import logging
import os
import signal
import sys
import threading
from typing import Optional

import anyio
from mcp.server.stdio import stdio_server

from mcp_jina_reader.config import Settings
from mcp_jina_reader.errors import transport_failure_from
from mcp_jina_reader.fetcher import ContentFetcher
from mcp_jina_reader.server import build_server

logger = logging.getLogger("mcp_jina_reader.stdio")

# stdin is read in a worker thread that cancellation cannot interrupt
SHUTDOWN_GRACE = 3.0


def _force_exit() -> None:
    logger.warning("Shutdown did not finish within %.0fs, exiting", SHUTDOWN_GRACE)
    logging.shutdown()
    sys.stderr.flush()
    os._exit(0)


async def _cancel_on_signal(
    scope: anyio.CancelScope, watchdog: threading.Timer, *, task_status=anyio.TASK_STATUS_IGNORED
) -> None:
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        task_status.started()
        async for signum in signals:
            logger.info("Received %s, shutting down", signal.Signals(signum).name)
            watchdog.start()
            scope.cancel()
            return


async def serve_stdio(settings: Settings, fetcher: Optional[ContentFetcher] = None) -> None:
    app = build_server(settings, fetcher)
    logger.info("Serving %s over stdio", app.name)
    watchdog = threading.Timer(SHUTDOWN_GRACE, _force_exit)
    watchdog.daemon = True
    try:
        async with anyio.create_task_group() as tg:
            await tg.start(_cancel_on_signal, tg.cancel_scope, watchdog)
            async with stdio_server() as (read_stream, write_stream):
                await app.run(read_stream, write_stream, app.create_initialization_options())
            # stdin closed by the client
            tg.cancel_scope.cancel()
    except Exception as exc:
        failure = transport_failure_from(exc)
        if failure is None:
            raise
        raise failure from exc
    finally:
        watchdog.cancel()
    logger.info("Stdio session closed")


def main(settings: Optional[Settings] = None) -> None:
    settings = settings or Settings()
    anyio.run(serve_stdio, settings)

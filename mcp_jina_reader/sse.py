"""
HTTP event-stream transport.

  GET  /sse      opens a session; the first event names the POST endpoint
                 (/message?session_id=<id>) for that session
  POST /message  delivers one client message to the session in `session_id`

Sessions are keyed by id inside the SDK transport, so every client gets its
own server session. A POST without a known session is answered with 400/404.
"""
import asyncio
import contextlib
import logging
from typing import Optional

import uvicorn
from mcp.server.lowlevel import Server
from mcp.server.sse import SseServerTransport
from starlette.applications import Starlette
from starlette.routing import Route

from mcp_jina_reader.config import Settings
from mcp_jina_reader.errors import transport_failure_from
from mcp_jina_reader.fetcher import ContentFetcher
from mcp_jina_reader.server import build_server

logger = logging.getLogger("mcp_jina_reader.sse")

SSE_PATH = "/sse"
MESSAGE_PATH = "/message"


class StreamEndpoint:
    """ASGI endpoint holding one SSE response open per session."""

    def __init__(self, transport: SseServerTransport, server: Server):
        self.transport = transport
        self.server = server

    async def __call__(self, scope, receive, send) -> None:
        logger.info("Received connection")
        try:
            async with self.transport.connect_sse(scope, receive, send) as (read_stream, write_stream):
                await self.server.run(read_stream, write_stream, self.server.create_initialization_options())
        except Exception as exc:
            failure = transport_failure_from(exc)
            if failure is None:
                raise
            logger.warning("Session ended by transport error: %s", failure)
            return
        logger.info("Connection closed")


class MessageEndpoint:
    def __init__(self, transport: SseServerTransport):
        self.transport = transport

    async def __call__(self, scope, receive, send) -> None:
        logger.info("Received message")
        await self.transport.handle_post_message(scope, receive, send)


def create_app(settings: Settings, fetcher: Optional[ContentFetcher] = None) -> Starlette:
    server = build_server(settings, fetcher)
    transport = SseServerTransport(MESSAGE_PATH)

    @contextlib.asynccontextmanager
    async def lifespan(_app):
        logger.info("Server is running on port %s", settings.port)
        yield

    return Starlette(
        routes=[
            Route(SSE_PATH, endpoint=StreamEndpoint(transport, server), methods=["GET"]),
            Route(MESSAGE_PATH, endpoint=MessageEndpoint(transport), methods=["POST"]),
        ],
        lifespan=lifespan,
    )


async def serve_sse(settings: Settings) -> None:
    config = uvicorn.Config(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    await uvicorn.Server(config).serve()


def main(settings: Optional[Settings] = None) -> None:
    asyncio.run(serve_sse(settings or Settings()))

"""Bind the reader handlers onto a low-level MCP server."""
import logging
from typing import Any, Optional

from mcp import types
from mcp.server.lowlevel import Server

from mcp_jina_reader import SERVER_NAME, __version__
from mcp_jina_reader.config import Settings
from mcp_jina_reader.fetcher import ContentFetcher
from mcp_jina_reader.protocol import ReaderProtocol

logger = logging.getLogger("mcp_jina_reader.server")


def build_server(settings: Settings, fetcher: Optional[ContentFetcher] = None) -> Server:
    """Create a server advertising the fetch tool, plus the prompt when enabled.

    With prompts disabled no prompt handler is registered at all, so the
    `prompts` capability is missing from the initialize response.
    """
    protocol = ReaderProtocol(fetcher or ContentFetcher(settings), prompts_enabled=settings.prompts_enabled)
    app = Server(SERVER_NAME, version=__version__)

    @app.list_tools()
    async def list_tools() -> list[types.Tool]:
        return protocol.list_callables()

    @app.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        outcome = await protocol.invoke_callable(name, arguments)
        if not outcome.ok:
            # the SDK reports this as a CallToolResult with isError set
            raise outcome.error.to_mcp_error()
        return outcome.value

    if settings.prompts_enabled:

        @app.list_prompts()
        async def list_prompts() -> list[types.Prompt]:
            return protocol.list_prompts()

        @app.get_prompt()
        async def get_prompt(name: str, arguments: Optional[dict[str, str]]) -> types.GetPromptResult:
            outcome = await protocol.get_prompt(name, arguments)
            if not outcome.ok:
                raise outcome.error.to_mcp_error()
            return outcome.value

    logger.debug("Built %s %s (prompts %s)", SERVER_NAME, __version__,
                 "enabled" if settings.prompts_enabled else "disabled")
    return app

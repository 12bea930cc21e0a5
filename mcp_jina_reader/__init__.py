"""MCP server exposing the Jina Reader as a tool and a prompt."""

SERVER_NAME = "mcp-jina-reader"
__version__ = "0.1.0"

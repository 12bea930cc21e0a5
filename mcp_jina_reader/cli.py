import argparse
import logging
import sys
from typing import Optional, Sequence

import pydantic

from mcp_jina_reader import SERVER_NAME, __version__
from mcp_jina_reader.config import Settings
from mcp_jina_reader.errors import ReaderError

logger = logging.getLogger("mcp_jina_reader.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=SERVER_NAME, description="Jina Reader MCP server")
    parser.add_argument("--transport", choices=("stdio", "sse"), default="stdio")
    parser.add_argument("--host", help="SSE bind address (env HOST)")
    parser.add_argument("--port", type=int, help="SSE port (env PORT, default 3001)")
    parser.add_argument(
        "--no-prompts",
        dest="prompts_enabled",
        action="store_false",
        default=None,
        help="do not advertise the fetch_url_content prompt",
    )
    parser.add_argument("--log-level", help="logging level (env LOG_LEVEL)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    return Settings.with_overrides(
        host=args.host,
        port=args.port,
        prompts_enabled=args.prompts_enabled,
        log_level=args.log_level,
    )


def configure_logging(level: str) -> None:
    # stdout carries the protocol in stdio mode
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args)
    except pydantic.ValidationError as exc:
        sys.stderr.write(f"Invalid configuration:\n{exc}\n")
        sys.exit(2)
    configure_logging(settings.log_level)

    try:
        if args.transport == "sse":
            from mcp_jina_reader import sse

            sse.main(settings)
        else:
            from mcp_jina_reader import stdio

            stdio.main(settings)
    except ReaderError as exc:
        logger.error("%s stopped: %s", SERVER_NAME, exc)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    sys.exit(0)


def sse_main(argv: Optional[Sequence[str]] = None) -> None:
    main(["--transport", "sse", *(argv if argv is not None else sys.argv[1:])])

"""Failures a single request can end in.

Each error knows the JSON-RPC code it is reported with, so transports can
turn any of them into a protocol-level error response.
"""

import anyio
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, ErrorData


class ReaderError(Exception):
    code = INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_mcp_error(self) -> McpError:
        return McpError(ErrorData(code=self.code, message=self.message))


class ValidationError(ReaderError):
    """Arguments do not match the declared schema."""

    code = INVALID_PARAMS


class UnknownCallable(ReaderError):
    code = INVALID_PARAMS

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class UnknownPrompt(ReaderError):
    code = INVALID_PARAMS

    def __init__(self, name: str):
        super().__init__(f"Unknown prompt: {name}")
        self.name = name


class FetchFailure(ReaderError):
    """The reader service answered with a non-2xx status or could not be reached."""

    def __init__(self, url: str, reason: str, status_code=None):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class TransportFailure(ReaderError):
    pass


_STREAM_ERRORS = (anyio.BrokenResourceError, anyio.ClosedResourceError, anyio.EndOfStream, OSError)


def transport_failure_from(exc: BaseException):
    """Return a TransportFailure if `exc` (or an exception it groups) is a stream error, else None."""
    if isinstance(exc, _STREAM_ERRORS):
        detail = str(exc)
        name = exc.__class__.__name__
        return TransportFailure(f"{name}: {detail}" if detail else name)
    for inner in getattr(exc, "exceptions", ()):
        failure = transport_failure_from(inner)
        if failure is not None:
            return failure
    return None

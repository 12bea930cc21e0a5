"""Request handlers of the reader server.

Every handler returns an `Outcome`: either a value or a `ReaderError`. Nothing
here raises for a failed request, so a transport can map each error kind to a
response without unwinding.
"""
import logging
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

import pydantic
from mcp import types

from mcp_jina_reader import registry
from mcp_jina_reader.errors import ReaderError, UnknownCallable, UnknownPrompt, ValidationError
from mcp_jina_reader.fetcher import ContentFetcher

logger = logging.getLogger("mcp_jina_reader.protocol")

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    value: Optional[T] = None
    error: Optional[ReaderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ReaderProtocol:
    """Tool and prompt handlers bound to one fetcher."""

    def __init__(self, fetcher: ContentFetcher, prompts_enabled: bool = True):
        self.fetcher = fetcher
        self.prompts_enabled = prompts_enabled

    def list_callables(self) -> list[types.Tool]:
        return list(registry.TOOLS.values())

    def list_prompts(self) -> list[types.Prompt]:
        return list(registry.PROMPTS.values()) if self.prompts_enabled else []

    async def _fetch(self, name: str, arguments) -> Outcome[tuple[str, str]]:
        try:
            url = registry.FetchUrlArguments.model_validate(arguments or {}).url
        except pydantic.ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(map(str, err['loc'])) or 'arguments'}: {err['msg']}" for err in exc.errors()
            )
            logger.warning("Rejected %s: %s", name, problems)
            return Outcome(error=ValidationError(f"Invalid arguments: {problems}"))
        try:
            text = await self.fetcher.fetch(url)
        except ReaderError as exc:
            credential = "with" if self.fetcher.settings.has_api_key else "without"
            logger.error("%s failed for %s (%s API key): %s", name, url, credential, exc)
            return Outcome(error=exc)
        return Outcome(value=(url, text))

    async def invoke_callable(self, name: str, arguments) -> Outcome[list[types.TextContent]]:
        if name not in registry.TOOLS:
            logger.warning("Unknown tool requested: %s", name)
            return Outcome(error=UnknownCallable(name))
        fetched = await self._fetch(name, arguments)
        if not fetched.ok:
            return Outcome(error=fetched.error)
        _, text = fetched.value
        return Outcome(value=[types.TextContent(type="text", text=text)])

    async def get_prompt(self, name: str, arguments) -> Outcome[types.GetPromptResult]:
        if not self.prompts_enabled or name not in registry.PROMPTS:
            logger.warning("Unknown prompt requested: %s", name)
            return Outcome(error=UnknownPrompt(name))
        fetched = await self._fetch(name, arguments)
        if not fetched.ok:
            return Outcome(error=fetched.error)
        url, text = fetched.value
        message = types.PromptMessage(
            role="user",
            content=types.TextContent(type="text", text=f"Content of {url}:\n{text}"),
        )
        return Outcome(value=types.GetPromptResult(description=f"Content of {url}", messages=[message]))

"""
Jina Reader client: fetch a page rendered as Markdown.

The target URL is appended verbatim to the reader endpoint, e.g.
  GET https://r.jina.ai/https://example.com
"""
import logging
from typing import Optional

import httpx

from mcp_jina_reader.config import Settings
from mcp_jina_reader.errors import FetchFailure

logger = logging.getLogger("mcp_jina_reader.fetcher")


class ContentFetcher:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def endpoint_for(self, url: str) -> str:
        return f"{self.settings.base_url}{url}"

    def headers(self) -> dict:
        if self.settings.has_api_key:
            return {"Authorization": f"Bearer {self.settings.api_key}"}
        return {}

    async def fetch(self, url: str) -> str:
        """Return the Markdown body for `url`; raise FetchFailure on anything but 2xx."""
        logger.info("Fetching %s %s", url, "with API key" if self.settings.has_api_key else "without API key")
        async with httpx.AsyncClient(
            timeout=self.settings.timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                resp = await client.get(self.endpoint_for(url), headers=self.headers())
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                logger.warning("Reader request for %s failed: %s", url, exc)
                raise FetchFailure(url, str(exc) or exc.__class__.__name__) from exc
        if not resp.is_success:
            logger.warning("Reader returned %s for %s", resp.status_code, url)
            raise FetchFailure(url, resp.reason_phrase, status_code=resp.status_code)
        return resp.text

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import httpx  # noqa: E402
import pytest  # noqa: E402

from mcp_jina_reader.config import Settings  # noqa: E402
from mcp_jina_reader.fetcher import ContentFetcher  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_reader_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of the tests."""

    for var in (
        "JINA_API_KEY",
        "JINA_READER_BASE_URL",
        "JINA_READER_TIMEOUT",
        "JINA_READER_PROMPTS",
        "HOST",
        "PORT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


class Upstream:
    """Stand-in for the reader service; records every request it receives."""

    def __init__(self, status_code: int = 200, text: str = "# Example\n\nbody", error=None):
        self.status_code = status_code
        self.text = text
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.text)

    def fetcher(self, settings: Settings) -> ContentFetcher:
        return ContentFetcher(settings, transport=httpx.MockTransport(self))


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def make_upstream():
    return Upstream

import pytest
from mcp import types

from mcp_jina_reader import registry
from mcp_jina_reader.config import Settings
from mcp_jina_reader.errors import FetchFailure, UnknownCallable, UnknownPrompt, ValidationError
from mcp_jina_reader.protocol import Outcome, ReaderProtocol


def _protocol(upstream, prompts_enabled=True, **settings):
    return ReaderProtocol(upstream.fetcher(Settings(**settings)), prompts_enabled=prompts_enabled)


def test_outcome_ok():
    assert Outcome(value=3).ok
    assert not Outcome(error=UnknownCallable("nope")).ok


def test_list_callables_matches_registry(upstream):
    (tool,) = _protocol(upstream).list_callables()

    assert tool.name == "fetch_url_content"
    assert tool.description == "Fetch the content of a URL as Markdown."
    assert tool.inputSchema == registry.input_schema()


@pytest.mark.anyio
async def test_invoke_returns_text_content(upstream):
    outcome = await _protocol(upstream, api_key="abc").invoke_callable(
        "fetch_url_content", {"url": "https://example.com"}
    )

    assert outcome.ok
    assert outcome.value == [types.TextContent(type="text", text=upstream.text)]
    (request,) = upstream.requests
    assert str(request.url) == "https://r.jina.ai/https://example.com"
    assert request.headers["Authorization"] == "Bearer abc"


@pytest.mark.anyio
@pytest.mark.parametrize("arguments", [{"url": "definitely not a url"}, {"url": "example.com"}, {}, None, {"url": 42}])
async def test_invalid_arguments_never_reach_upstream(upstream, arguments):
    outcome = await _protocol(upstream).invoke_callable("fetch_url_content", arguments)

    assert isinstance(outcome.error, ValidationError)
    assert "url" in str(outcome.error)
    assert upstream.requests == []


@pytest.mark.anyio
async def test_unknown_callable_never_reaches_upstream(upstream):
    outcome = await _protocol(upstream).invoke_callable("fetch", {"url": "https://example.com"})

    assert isinstance(outcome.error, UnknownCallable)
    assert upstream.requests == []


@pytest.mark.anyio
async def test_upstream_failure_is_returned_not_retried(make_upstream):
    upstream = make_upstream(status_code=404)

    outcome = await _protocol(upstream).invoke_callable("fetch_url_content", {"url": "https://example.com"})

    assert isinstance(outcome.error, FetchFailure)
    assert "Not Found" in str(outcome.error)
    assert len(upstream.requests) == 1


@pytest.mark.anyio
async def test_listed_schema_round_trips_through_invoke(upstream):
    protocol = _protocol(upstream)
    (tool,) = protocol.list_callables()
    accepted = {name: "https://example.com/page" for name in tool.inputSchema["required"]}

    assert (await protocol.invoke_callable(tool.name, accepted)).ok
    rejected = await protocol.invoke_callable(tool.name, {name: "nope" for name in accepted})
    assert isinstance(rejected.error, ValidationError)


@pytest.mark.anyio
async def test_get_prompt_wraps_content_in_user_message(upstream):
    outcome = await _protocol(upstream).get_prompt("fetch_url_content", {"url": "https://example.com"})

    assert outcome.ok
    result = outcome.value
    assert result.description == "Content of https://example.com"
    (message,) = result.messages
    assert message.role == "user"
    assert message.content.type == "text"
    assert message.content.text == f"Content of https://example.com:\n{upstream.text}"


@pytest.mark.anyio
async def test_get_prompt_validates_like_the_tool(upstream):
    protocol = _protocol(upstream)

    invalid = await protocol.get_prompt("fetch_url_content", {"url": "nope"})
    unknown = await protocol.get_prompt("summarize", {"url": "https://example.com"})

    assert isinstance(invalid.error, ValidationError)
    assert isinstance(unknown.error, UnknownPrompt)
    assert upstream.requests == []


@pytest.mark.anyio
async def test_disabled_prompts_are_hidden_and_refused(upstream):
    protocol = _protocol(upstream, prompts_enabled=False)

    assert protocol.list_prompts() == []
    outcome = await protocol.get_prompt("fetch_url_content", {"url": "https://example.com"})
    assert isinstance(outcome.error, UnknownPrompt)
    assert upstream.requests == []


@pytest.mark.anyio
async def test_fetch_failure_is_logged_with_context(make_upstream, caplog):
    upstream = make_upstream(status_code=500)

    with caplog.at_level("ERROR", logger="mcp_jina_reader.protocol"):
        await _protocol(upstream).invoke_callable("fetch_url_content", {"url": "https://example.com"})

    (record,) = [r for r in caplog.records if r.name == "mcp_jina_reader.protocol"]
    assert "https://example.com" in record.getMessage()
    assert "without API key" in record.getMessage()


@pytest.mark.anyio
@pytest.mark.parametrize(
    "url",
    ["https://example.com/a\nb", "https://example.com/a\tb", "https://example.com/" + "a" * 70000],
    ids=["newline", "tab", "too-long"],
)
async def test_urls_httpx_refuses_fail_validation(upstream, url):
    protocol = _protocol(upstream)

    tool = await protocol.invoke_callable("fetch_url_content", {"url": url})
    prompt = await protocol.get_prompt("fetch_url_content", {"url": url})

    assert isinstance(tool.error, ValidationError)
    assert isinstance(prompt.error, ValidationError)
    assert upstream.requests == []

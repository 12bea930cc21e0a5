"""Static declarations of the one tool and the one prompt.

Discovery and invocation both derive from `FetchUrlArguments`, so the schema
clients see is the schema requests are validated against.
"""
import httpx
from pydantic import AnyUrl, BaseModel, Field, TypeAdapter, field_validator
from mcp import types

FETCH_URL_CONTENT = "fetch_url_content"
DESCRIPTION = "Fetch the content of a URL as Markdown."

_url_adapter = TypeAdapter(AnyUrl)


class FetchUrlArguments(BaseModel):
    url: str = Field(
        ...,
        description="The URL to fetch the content of.",
        json_schema_extra={"format": "uri"},
    )

    @field_validator("url")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        # keep the caller's string, AnyUrl would normalise it (trailing slash)
        try:
            _url_adapter.validate_python(value)
            httpx.URL(value)
        except (ValueError, httpx.InvalidURL):
            shown = value if len(value) <= 100 else value[:100] + "..."
            raise ValueError(f"{shown!r} is not a valid URL") from None
        return value


def input_schema() -> dict:
    return FetchUrlArguments.model_json_schema()


def prompt_arguments() -> list[types.PromptArgument]:
    required = set(input_schema().get("required", []))
    return [
        types.PromptArgument(name=name, description=field.description, required=name in required)
        for name, field in FetchUrlArguments.model_fields.items()
    ]


TOOLS = {
    FETCH_URL_CONTENT: types.Tool(
        name=FETCH_URL_CONTENT,
        description=DESCRIPTION,
        inputSchema=input_schema(),
    ),
}

PROMPTS = {
    FETCH_URL_CONTENT: types.Prompt(
        name=FETCH_URL_CONTENT,
        description=DESCRIPTION,
        arguments=prompt_arguments(),
    ),
}

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://r.jina.ai/"
DEFAULT_PORT = 3001

# the levels uvicorn accepts as well
LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    """Process-wide configuration, loaded once at start and never mutated."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    api_key: Optional[str] = Field(default=None, validation_alias="JINA_API_KEY")
    base_url: str = Field(default=DEFAULT_BASE_URL, validation_alias="JINA_READER_BASE_URL")
    timeout: float = Field(default=30.0, gt=0, validation_alias="JINA_READER_TIMEOUT")
    prompts_enabled: bool = Field(default=True, validation_alias="JINA_READER_PROMPTS")
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535, validation_alias="PORT")
    log_level: LogLevel = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("api_key")
    @classmethod
    def _blank_key_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @property
    def has_api_key(self) -> bool:
        return self.api_key is not None

    @classmethod
    def with_overrides(cls, **overrides) -> "Settings":
        """Settings from the environment, with explicit non-None values (CLI flags) winning."""
        aliases = {name: field.validation_alias for name, field in cls.model_fields.items()}
        return cls(**{aliases[name]: value for name, value in overrides.items() if value is not None})

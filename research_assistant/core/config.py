"""Application settings loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


class Settings(BaseSettings):
    """
    Configuration loaded from environment variables.

    Only secrets and deployment-specific values belong here.
    Prompt text and model parameters live in `core.constants`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ---------------------------------------------------------------------------
    # Server
    # ---------------------------------------------------------------------------
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3001, validation_alias="PORT")

    # ---------------------------------------------------------------------------
    # LLM provider (the key is optional at startup; summarize fails fast without it)
    # ---------------------------------------------------------------------------
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    openai_base_url: str = Field(default="https://api.openai.com/v1", validation_alias="OPENAI_BASE_URL")
    openai_model: str = Field(default="gpt-4o-mini", validation_alias="OPENAI_MODEL")

    # ---------------------------------------------------------------------------
    # Environment config (optional)
    # ---------------------------------------------------------------------------
    app_env: str = Field(default="local", validation_alias="APP_ENV")
    strict_key_points: bool = Field(default=False, validation_alias="STRICT_KEY_POINTS")

    # ---------------------------------------------------------------------------
    # Deployment config (optional)
    # ---------------------------------------------------------------------------
    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        validation_alias="CORS_ALLOW_ORIGINS",
    )
    max_request_bytes: int = Field(default=50 * 1024 * 1024, validation_alias="MAX_REQUEST_BYTES")  # 0 = disabled
    static_dir: Path = Field(default=DEFAULT_STATIC_DIR, validation_alias="STATIC_DIR")

    # ---------------------------------------------------------------------------
    # Page client
    # ---------------------------------------------------------------------------
    gateway_url: str = Field(default="http://localhost:3001", validation_alias="GATEWAY_URL")

    @field_validator(
        "host",
        "openai_api_key",
        "openai_base_url",
        "openai_model",
        "app_env",
        "gateway_url",
        mode="before",
    )
    @classmethod
    def _strip_strings(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _parse_list(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            items = [item.strip() for item in value.split(",")]
            return [item for item in items if item]
        return value

    @field_validator("max_request_bytes", mode="before")
    @classmethod
    def _clamp_request_bytes(cls, value: object) -> object:
        if isinstance(value, int):
            return max(0, value)
        return value

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

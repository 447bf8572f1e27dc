"""Configuration schema using Pydantic."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MAX_TOKENS = 1024
DEFAULT_TEMPERATURE = 0.7
DEFAULT_LANGUAGE = "client"


class TaskConfig(BaseModel):
    """Per-task model configuration. Each task is complete and self-contained."""

    model_config = ConfigDict(frozen=True)

    provider: str
    model: str
    api_key: str | None = None
    base_url: str | None = None
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, ge=0)
    temperature: float = DEFAULT_TEMPERATURE

    @field_validator("provider", "model", mode="before")
    @classmethod
    def _require_text(cls, v: Any) -> str:
        if v is None or str(v).strip() == "":
            raise ValueError("must be a non-empty string")
        return str(v)

    @field_validator("api_key", "base_url", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> str | None:
        # Empty strings behave like absent values.
        return str(v) if v else None

    @field_validator("max_tokens", mode="before")
    @classmethod
    def _default_max_tokens(cls, v: Any) -> Any:
        return DEFAULT_MAX_TOKENS if v is None else v

    @field_validator("temperature", mode="before")
    @classmethod
    def _default_temperature(cls, v: Any) -> Any:
        return DEFAULT_TEMPERATURE if v is None else v


class Config(BaseModel):
    """Top-level adapter configuration with per-event-type task routing."""

    model_config = ConfigDict(frozen=True)

    tasks: dict[str, TaskConfig]
    language: str = DEFAULT_LANGUAGE

    @field_validator("language", mode="before")
    @classmethod
    def _normalize_language(cls, v: Any) -> str:
        return (str(v) if v else DEFAULT_LANGUAGE).strip().lower()

    @property
    def task_names(self) -> list[str]:
        return sorted(self.tasks)


def default_config() -> Config:
    """Configuration used when nothing is provided by the operator."""
    return Config(
        tasks={"user_intent": TaskConfig(provider="openai", model="gpt-4o-mini")},
        language=DEFAULT_LANGUAGE,
    )

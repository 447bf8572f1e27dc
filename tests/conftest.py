"""
Pytest configuration and shared fixtures.

This module provides common fixtures for all tests, including:
- Task configuration builders
- Mock model handles standing in for LiteLLM calls
- Requests shaped like the orchestrator's
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from loguru import logger

from voxroute.config.schema import Config, TaskConfig
from voxroute.intent.models import (
    ResolveIntentRequest,
    SessionInfo,
    ToolCall,
    ToolInteraction,
    ToolResult,
)
from voxroute.providers.base import GenerationResult, LLMProvider


def _build_config(tasks: dict[str, tuple[str, str]], language: str = "client", **extra) -> Config:
    """Config with one (provider, model) profile per task key."""
    return Config(
        tasks={
            key: TaskConfig(provider=provider, model=model, **extra.get(key, {}))
            for key, (provider, model) in tasks.items()
        },
        language=language,
    )


def _make_interaction(
    call_id: str,
    tool_name: str,
    args_json: str,
    result_json: str,
    is_error: bool = False,
) -> ToolInteraction:
    return ToolInteraction(
        call=ToolCall(call_id=call_id, tool_name=tool_name, arguments_json=args_json),
        result=ToolResult(call_id=call_id, result_json=result_json, is_error=is_error),
    )


@pytest.fixture
def config():
    """Config with a default intent task and a summary task."""
    return _build_config({
        "user_intent": ("openai", "gpt-4o-mini"),
        "history_summary": ("anthropic", "claude-sonnet-4-5"),
    })


@pytest.fixture
def build_config():
    """Factory: build_config({"user_intent": ("openai", "gpt-4o")}, language="auto")."""
    return _build_config


@pytest.fixture
def make_interaction():
    """Factory for a complete call/result tool interaction."""
    return _make_interaction


@pytest.fixture
def log_messages():
    """Capture loguru output as a list of formatted messages."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def mock_model():
    """
    Mock generation handle.

    Usage in tests:
        mock_model.generate.return_value = GenerationResult(text="hi")
    """
    model = MagicMock(spec=LLMProvider)
    model.generate = AsyncMock(return_value=GenerationResult())
    return model


@pytest.fixture
def request_factory():
    """Build a ResolveIntentRequest with sensible defaults."""

    def _make(**overrides) -> ResolveIntentRequest:
        data = {
            "prompt_id": "p-1",
            "transcript": "list the files",
            "session_id": "sess-1",
            "current_tool": "bash",
            "event_type": "EVENT_TYPE_USER_INTENT",
            "available_sessions": [
                SessionInfo(id="sess-1", command="bash", work_dir="/home/dev", status="running"),
            ],
        }
        data.update(overrides)
        return ResolveIntentRequest(**data)

    return _make

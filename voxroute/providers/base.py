"""Provider contracts shared by the router and the intent engine."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Conversation messages
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SystemMessage:
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"role": "system", "content": self.content}


@dataclass(frozen=True, slots=True)
class UserMessage:
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"role": "user", "content": self.content}


@dataclass(frozen=True, slots=True)
class AssistantToolCallMessage:
    """A past tool call the assistant requested."""

    tool_call_id: str
    tool_name: str
    arguments: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": "assistant",
            "content": None,
            "tool_calls": [{
                "id": self.tool_call_id,
                "type": "function",
                "function": {
                    "name": self.tool_name,
                    "arguments": json.dumps(self.arguments, ensure_ascii=False),
                },
            }],
        }


@dataclass(frozen=True, slots=True)
class ToolResultMessage:
    """The outcome of a past tool call, paired by ``tool_call_id``."""

    tool_call_id: str
    tool_name: str
    output: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": "tool",
            "tool_call_id": self.tool_call_id,
            "name": self.tool_name,
            "content": json.dumps(self.output, ensure_ascii=False),
        }


Message = Union[SystemMessage, UserMessage, AssistantToolCallMessage, ToolResultMessage]


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Declaration of a tool the model may ask for. Never executed here."""

    name: str
    description: str
    parameters: dict[str, Any]

    def to_schema(self) -> dict[str, Any]:
        """OpenAI function-calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


@dataclass(slots=True)
class ToolCallRequest:
    """A tool call requested by the LLM.

    ``raw_arguments`` holds the model's own argument text when it could not
    be decoded; ``arguments`` is then empty.
    """
    id: str
    name: str
    arguments: Any
    raw_arguments: str | None = None

    @property
    def arguments_json(self) -> str:
        if self.raw_arguments is not None:
            return self.raw_arguments
        return json.dumps(self.arguments, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class GenerationResult:
    """Raw outcome of a generation call.

    At most one of ``tool_calls`` / ``object`` is expected to be meaningful;
    ``text`` keeps whatever free text the model produced.
    """
    object: BaseModel | None = None
    tool_calls: list[ToolCallRequest] = field(default_factory=list)
    text: str = ""
    finish_reason: str = "stop"
    usage: dict[str, int] = field(default_factory=dict)

    @property
    def has_tool_calls(self) -> bool:
        return len(self.tool_calls) > 0


@dataclass
class EmbeddingResult:
    embeddings: list[list[float]]
    model: str = ""
    usage: dict[str, int] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Provider interfaces
# ---------------------------------------------------------------------------


class LLMProvider(ABC):
    """
    Abstract base class for generation handles.

    A handle is bound to one model and its credentials; per-call parameters
    (token limit, temperature) come from the task profile.
    """

    def __init__(self, model: str, api_key: str | None = None, api_base: str | None = None):
        self.model = model
        self.api_key = api_key
        self.api_base = api_base

    @abstractmethod
    async def generate(
        self,
        *,
        schema: type[BaseModel],
        system: str | None = None,
        prompt: str | None = None,
        messages: Sequence[Message] | None = None,
        tools: Mapping[str, ToolDefinition] | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> GenerationResult:
        """
        Run one generation.

        Either ``messages`` or ``system`` + ``prompt`` is given. Provider
        errors propagate to the caller.
        """
        pass


class EmbeddingProvider(ABC):
    """Abstract base class for embedding handles."""

    def __init__(self, model: str, api_key: str | None = None, api_base: str | None = None):
        self.model = model
        self.api_key = api_key
        self.api_base = api_base

    @abstractmethod
    async def embed(self, texts: Sequence[str]) -> EmbeddingResult:
        """Embed *texts*, one vector per input in the same order."""
        pass

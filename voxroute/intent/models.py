"""Wire models for intent resolution requests and responses.

Field names are snake_case in Python and camelCase on the wire; both spellings
are accepted on input.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class SessionInfo(WireModel):
    id: str = ""
    command: str = ""
    work_dir: str = ""
    status: str = ""


class ToolDescriptor(WireModel):
    """A tool declared by the caller; the schema arrives as JSON text."""
    name: str = ""
    description: str = ""
    parameters_json: str = ""


class ToolCall(WireModel):
    call_id: str = ""
    tool_name: str = ""
    arguments_json: str = ""


class ToolResult(WireModel):
    call_id: str = ""
    result_json: str = ""
    is_error: bool = False


class ToolInteraction(WireModel):
    call: ToolCall | None = None
    result: ToolResult | None = None


class ResolveIntentRequest(WireModel):
    prompt_id: str = ""
    transcript: str = ""
    system_prompt: str = ""
    user_prompt: str = ""
    session_id: str = ""
    current_tool: str = ""
    available_sessions: list[SessionInfo] = Field(default_factory=list)
    event_type: str = ""
    available_tools: list[ToolDescriptor] = Field(default_factory=list)
    tool_history: list[ToolInteraction] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class ActionType(str, Enum):
    UNSPECIFIED = "ACTION_TYPE_UNSPECIFIED"
    COMMAND = "ACTION_TYPE_COMMAND"
    SPEAK = "ACTION_TYPE_SPEAK"
    CLARIFY = "ACTION_TYPE_CLARIFY"
    NOOP = "ACTION_TYPE_NOOP"
    TOOL_USE = "ACTION_TYPE_TOOL_USE"


class Action(WireModel):
    type: ActionType = ActionType.UNSPECIFIED
    session_ref: str = ""
    command: str = ""
    text: str = ""
    metadata: dict[str, str] = Field(default_factory=dict)


class ToolCallOut(WireModel):
    call_id: str
    tool_name: str
    arguments_json: str


class ResolveIntentResponse(WireModel):
    prompt_id: str = ""
    actions: list[Action] = Field(default_factory=list)
    reasoning: str = ""
    confidence: float = 0.0
    metadata: dict[str, str] = Field(default_factory=dict)
    error_message: str = ""
    tool_calls: list[ToolCallOut] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Structured output the model is asked to produce
# ---------------------------------------------------------------------------


IntentAction = Literal["command", "speak", "clarify", "noop"]


class IntentSchema(BaseModel):
    """Final answer shape requested from the model."""

    model_config = ConfigDict(populate_by_name=True)

    action: IntentAction = "noop"
    session_ref: str | None = Field(default=None, alias="sessionRef")
    command: str | None = None
    text: str | None = None
    reasoning: str
    confidence: float = Field(ge=0, le=1)

    @field_validator("action", mode="before")
    @classmethod
    def _unknown_action_is_noop(cls, v: Any) -> Any:
        return v if v in get_args(IntentAction) else "noop"


# ---------------------------------------------------------------------------
# Embeddings
# ---------------------------------------------------------------------------


class EmbeddingRequest(WireModel):
    texts: list[str] = Field(default_factory=list)


class EmbeddingResponse(WireModel):
    embeddings: list[list[float]] = Field(default_factory=list)
    model: str = ""
    error_message: str = ""

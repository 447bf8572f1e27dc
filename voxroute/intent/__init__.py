"""Intent resolution engine."""

from voxroute.intent.conversation import build_messages
from voxroute.intent.engine import (
    ActionResolved,
    Failed,
    Fallback,
    FailureKind,
    IntentResult,
    IntentService,
    ToolUseRequested,
    resolve_intent,
    to_response,
)
from voxroute.intent.language import resolve_language_instruction
from voxroute.intent.tools import convert_tool_definitions

__all__ = [
    "ActionResolved",
    "Failed",
    "Fallback",
    "FailureKind",
    "IntentResult",
    "IntentService",
    "ToolUseRequested",
    "build_messages",
    "convert_tool_definitions",
    "resolve_intent",
    "resolve_language_instruction",
    "to_response",
]

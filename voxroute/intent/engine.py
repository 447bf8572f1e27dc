"""Intent resolution: route, prompt, generate, classify.

The model decides intent by either asking for a tool call or returning a
structured ``IntentSchema`` object. Anything else is answered with a
low-confidence ``speak`` fallback so the caller always gets a reply.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from loguru import logger

from voxroute.config.schema import Config, TaskConfig
from voxroute.errors import MissingTaskConfigError
from voxroute.intent.conversation import build_messages
from voxroute.intent.models import (
    Action,
    ActionType,
    IntentSchema,
    ResolveIntentRequest,
    ResolveIntentResponse,
    ToolCallOut,
)
from voxroute.intent.prompts import build_system_prompt
from voxroute.intent.tools import convert_tool_definitions
from voxroute.providers.base import GenerationResult, LLMProvider
from voxroute.routing import TaskRouter, event_type_to_config_key

TOOL_USE_CONFIDENCE = 1.0
FALLBACK_CONFIDENCE = 0.3
FALLBACK_REASONING = "Fallback: model returned unstructured text"
FALLBACK_PLACEHOLDER = "I'm not sure how to help with that."

_ACTION_TYPES: dict[str, ActionType] = {
    "command": ActionType.COMMAND,
    "speak": ActionType.SPEAK,
    "clarify": ActionType.CLARIFY,
    "noop": ActionType.NOOP,
}


def action_type_for(action: str | None) -> ActionType:
    """Map a schema action to its wire type; unknown values are no-ops."""
    return _ACTION_TYPES.get(action or "", ActionType.NOOP)


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


class FailureKind(str, Enum):
    MISSING_TASK_CONFIG = "missing_task_config"
    CONFIGURATION = "configuration"
    BACKEND = "backend"


@dataclass(frozen=True, slots=True)
class RequestedToolCall:
    call_id: str
    tool_name: str
    arguments_json: str


@dataclass(frozen=True, slots=True)
class ToolUseRequested:
    tool_calls: tuple[RequestedToolCall, ...]
    confidence: float = TOOL_USE_CONFIDENCE


@dataclass(frozen=True, slots=True)
class ActionResolved:
    action: ActionType
    session_ref: str
    command: str
    text: str
    reasoning: str
    confidence: float


@dataclass(frozen=True, slots=True)
class Fallback:
    text: str
    reasoning: str = FALLBACK_REASONING
    confidence: float = FALLBACK_CONFIDENCE


@dataclass(frozen=True, slots=True)
class Failed:
    message: str
    kind: FailureKind = FailureKind.BACKEND


IntentResult = Union[ToolUseRequested, ActionResolved, Fallback, Failed]


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def classify(result: GenerationResult, request: ResolveIntentRequest) -> IntentResult:
    """Turn a raw generation result into exactly one outcome.

    Priority: tool calls, then a structured intent, then the fallback.
    """
    if result.has_tool_calls:
        return ToolUseRequested(tool_calls=tuple(
            RequestedToolCall(
                call_id=tc.id,
                tool_name=tc.name,
                arguments_json=tc.arguments_json,
            )
            for tc in result.tool_calls
        ))

    if isinstance(result.object, IntentSchema):
        obj = result.object
        return ActionResolved(
            action=action_type_for(obj.action),
            session_ref=obj.session_ref or request.session_id,
            command=obj.command or "",
            text=obj.text or "",
            reasoning=obj.reasoning,
            confidence=obj.confidence,
        )

    return Fallback(text=result.text.strip() or FALLBACK_PLACEHOLDER)


async def resolve_intent(
    model: LLMProvider,
    request: ResolveIntentRequest,
    config: Config,
    task_config: TaskConfig,
) -> IntentResult:
    """Resolve *request* with *model*; never raises."""
    system_prompt = build_system_prompt(request, config.language)
    user_prompt = request.user_prompt or request.transcript
    tools = convert_tool_definitions(request.available_tools)

    try:
        if request.tool_history:
            messages = build_messages(system_prompt, user_prompt, request.tool_history)
            result = await model.generate(
                schema=IntentSchema,
                messages=messages,
                tools=tools or None,
                max_tokens=task_config.max_tokens,
                temperature=task_config.temperature,
            )
        else:
            result = await model.generate(
                schema=IntentSchema,
                system=system_prompt,
                prompt=user_prompt,
                tools=tools or None,
                max_tokens=task_config.max_tokens,
                temperature=task_config.temperature,
            )
    except Exception as e:
        logger.error(f"AI generation error (promptId={request.prompt_id}): {e}")
        return Failed(message=str(e) or type(e).__name__)

    logger.debug(
        f"Generation finished (promptId={request.prompt_id}): "
        f"finish_reason={result.finish_reason}, tokens={result.usage.get('total_tokens', 0)}"
    )
    outcome = classify(result, request)
    if isinstance(outcome, Fallback):
        logger.warning(f"Model returned no structured intent (promptId={request.prompt_id}); using fallback")
    return outcome


def to_response(outcome: IntentResult, request: ResolveIntentRequest) -> ResolveIntentResponse:
    """Translate an outcome into the response contract."""
    if isinstance(outcome, ToolUseRequested):
        return ResolveIntentResponse(
            prompt_id=request.prompt_id,
            actions=[Action(type=ActionType.TOOL_USE)],
            confidence=outcome.confidence,
            tool_calls=[
                ToolCallOut(call_id=c.call_id, tool_name=c.tool_name, arguments_json=c.arguments_json)
                for c in outcome.tool_calls
            ],
        )
    if isinstance(outcome, ActionResolved):
        return ResolveIntentResponse(
            prompt_id=request.prompt_id,
            actions=[Action(
                type=outcome.action,
                session_ref=outcome.session_ref,
                command=outcome.command,
                text=outcome.text,
            )],
            reasoning=outcome.reasoning,
            confidence=outcome.confidence,
        )
    if isinstance(outcome, Fallback):
        return ResolveIntentResponse(
            prompt_id=request.prompt_id,
            actions=[Action(
                type=ActionType.SPEAK,
                session_ref=request.session_id,
                text=outcome.text,
            )],
            reasoning=outcome.reasoning,
            confidence=outcome.confidence,
        )
    if isinstance(outcome, Failed):
        return ResolveIntentResponse(
            prompt_id=request.prompt_id,
            confidence=0.0,
            error_message=outcome.message,
        )
    raise TypeError(f"Unhandled intent outcome: {outcome!r}")


class IntentService:
    """Entry point used by the HTTP boundary and the CLI."""

    def __init__(self, router: TaskRouter) -> None:
        self._router = router

    @property
    def router(self) -> TaskRouter:
        return self._router

    async def resolve(self, request: ResolveIntentRequest) -> IntentResult:
        event_key = event_type_to_config_key(request.event_type)
        transcript = request.transcript[:100]
        ellipsis = "..." if len(request.transcript) > 100 else ""
        logger.info(
            f"ResolveIntent: promptId={request.prompt_id}, "
            f"eventType={event_key or '(unspecified)'}, transcript=\"{transcript}{ellipsis}\""
        )

        try:
            route = self._router.resolve(event_key)
        except MissingTaskConfigError as e:
            logger.error(f"ResolveIntent missing task config: {e} (promptId={request.prompt_id})")
            return Failed(message=str(e), kind=FailureKind.MISSING_TASK_CONFIG)
        except Exception as e:
            logger.error(f"ResolveIntent routing error: {e} (promptId={request.prompt_id})")
            return Failed(message=str(e) or type(e).__name__, kind=FailureKind.CONFIGURATION)

        outcome = await resolve_intent(route.model, request, self._router.config, route.task_config)
        logger.info(f"Response: promptId={request.prompt_id}, outcome={type(outcome).__name__}")
        return outcome

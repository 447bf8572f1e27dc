"""System prompt assembly for intent resolution."""

from __future__ import annotations

from voxroute.intent.language import resolve_language_instruction
from voxroute.intent.models import ResolveIntentRequest

FALLBACK_PROMPT_TEMPLATE = """You are a voice assistant for a terminal/IDE environment.
Your job is to interpret user voice commands and decide what action to take.

Available sessions:
{sessions}

Current session: {session_id}
Current tool: {current_tool}

You must respond with one of these actions:
- command: Execute a shell command in a session
- speak: Speak a response to the user (no execution)
- clarify: Ask the user for more information
- noop: No action needed

Always include reasoning and confidence (0-1) in your response."""


def build_fallback_system_prompt(request: ResolveIntentRequest) -> str:
    """Prompt used when the caller did not send a pre-built one."""
    sessions = "\n".join(
        f"- {s.id}: {s.command} in {s.work_dir} ({s.status})"
        for s in request.available_sessions
    )
    return FALLBACK_PROMPT_TEMPLATE.format(
        sessions=sessions or "No active sessions",
        session_id=request.session_id or "none",
        current_tool=request.current_tool or "unknown",
    )


def build_system_prompt(request: ResolveIntentRequest, language: str) -> str:
    """Effective system prompt: base prompt plus the language paragraph."""
    prompt = request.system_prompt or build_fallback_system_prompt(request)
    instruction = resolve_language_instruction(language, request.metadata)
    if instruction:
        prompt = f"{prompt}\n\n{instruction}"
    return prompt

"""Rebuild a multi-turn conversation from prior tool interactions."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from loguru import logger

from voxroute.intent.models import ToolInteraction
from voxroute.providers.base import (
    AssistantToolCallMessage,
    Message,
    SystemMessage,
    ToolResultMessage,
    UserMessage,
)


def _parse_document(raw: str) -> Any:
    # Empty text means an empty document.
    return json.loads(raw) if raw else {}


def _interaction_messages(
    interaction: ToolInteraction,
) -> tuple[AssistantToolCallMessage, ToolResultMessage] | None:
    call, result = interaction.call, interaction.result
    if call is None or result is None:
        return None

    try:
        arguments = _parse_document(call.arguments_json)
        output = _parse_document(result.result_json)
    except (ValueError, RecursionError) as e:
        logger.warning(f"Skipping tool interaction '{call.call_id}' ({call.tool_name}): malformed JSON ({e})")
        return None

    if result.is_error:
        output = {"error": True, "message": output}

    return (
        AssistantToolCallMessage(
            tool_call_id=call.call_id,
            tool_name=call.tool_name,
            arguments=arguments,
        ),
        ToolResultMessage(
            tool_call_id=call.call_id,
            tool_name=call.tool_name,
            output=output,
        ),
    )


def build_messages(
    system_prompt: str,
    user_prompt: str,
    tool_history: Sequence[ToolInteraction] | None,
) -> list[Message]:
    """
    Build the message list for a multi-turn generation.

    Order: system, user, then for each usable interaction the assistant's
    tool call immediately followed by its result. Interactions missing a half
    or carrying malformed JSON are dropped; the rest are kept in order.
    This function never raises.
    """
    messages: list[Message] = [
        SystemMessage(content=system_prompt),
        UserMessage(content=user_prompt),
    ]
    for interaction in tool_history or ():
        pair = _interaction_messages(interaction)
        if pair is not None:
            messages.extend(pair)
    return messages

"""Convert caller-declared tools into model-invocable tool definitions."""

from __future__ import annotations

import json
from collections.abc import Sequence

from loguru import logger

from voxroute.intent.models import ToolDescriptor
from voxroute.providers.base import ToolDefinition

_DEFAULT_PARAMETERS = '{"type":"object"}'


def _convert_one(descriptor: ToolDescriptor) -> ToolDefinition | None:
    if not descriptor.name:
        return None
    try:
        schema = json.loads(descriptor.parameters_json or _DEFAULT_PARAMETERS)
    except (ValueError, RecursionError) as e:
        logger.warning(f"Skipping tool '{descriptor.name}': invalid parametersJson ({e})")
        return None
    if not isinstance(schema, dict):
        logger.warning(f"Skipping tool '{descriptor.name}': parametersJson is not an object")
        return None
    return ToolDefinition(
        name=descriptor.name,
        description=descriptor.description or "",
        parameters=schema,
    )


def convert_tool_definitions(
    descriptors: Sequence[ToolDescriptor] | None,
) -> dict[str, ToolDefinition]:
    """
    Convert declared tools to definitions keyed by name.

    Definitions carry no execute hook; the caller runs tools itself. Unnamed
    descriptors and descriptors with malformed schemas are dropped.
    """
    if not descriptors:
        return {}

    tools: dict[str, ToolDefinition] = {}
    for descriptor in descriptors:
        definition = _convert_one(descriptor)
        if definition is not None:
            tools[definition.name] = definition
    return tools

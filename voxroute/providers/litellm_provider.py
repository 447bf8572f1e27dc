"""LiteLLM provider implementation for multi-provider support."""

import json
import re
from collections.abc import Mapping, Sequence
from typing import Any

import litellm
from litellm import acompletion, aembedding
from loguru import logger
from pydantic import BaseModel, ValidationError

from voxroute.providers.base import (
    EmbeddingProvider,
    EmbeddingResult,
    GenerationResult,
    LLMProvider,
    Message,
    ToolCallRequest,
    ToolDefinition,
)

# Disable LiteLLM logging noise
litellm.suppress_debug_info = True
# Drop unsupported parameters for providers (e.g. response_format on older models)
litellm.drop_params = True

_FENCE_RE = re.compile(r"^```[\w-]*\s*(.*?)\s*(?:```)?$", re.DOTALL)


def _credential_kwargs(api_key: str | None, api_base: str | None) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    # Explicit credentials take precedence over provider env vars
    if api_key:
        kwargs["api_key"] = api_key
    # Pass api_base for custom endpoints
    if api_base:
        kwargs["api_base"] = api_base
    return kwargs


def _parse_usage(response: Any) -> dict[str, int]:
    usage = getattr(response, "usage", None)
    if not usage:
        return {}
    return {
        "prompt_tokens": getattr(usage, "prompt_tokens", 0) or 0,
        "completion_tokens": getattr(usage, "completion_tokens", 0) or 0,
        "total_tokens": getattr(usage, "total_tokens", 0) or 0,
    }


class LiteLLMProvider(LLMProvider):
    """
    Generation handle using LiteLLM.

    One instance is bound to one resolved model name (already carrying its
    litellm prefix, e.g. ``anthropic/claude-sonnet-4-5``) and its credentials.
    """

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
        Send a chat completion request via LiteLLM.

        Args:
            schema: Pydantic model the final answer must conform to.
            system: System prompt (single-turn form).
            prompt: User prompt (single-turn form).
            messages: Full conversation (multi-turn form); wins over system/prompt.
            tools: Declared tools, keyed by name.
            max_tokens: Maximum tokens in response.
            temperature: Sampling temperature.

        Returns:
            GenerationResult with a validated object, tool calls, or free text.
        """
        if messages is not None:
            wire_messages = [m.to_dict() for m in messages]
        else:
            wire_messages = [
                {"role": "system", "content": system or ""},
                {"role": "user", "content": prompt or ""},
            ]

        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": wire_messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "response_format": {
                "type": "json_schema",
                "json_schema": {
                    "name": schema.__name__,
                    "schema": schema.model_json_schema(),
                },
            },
        }
        kwargs.update(_credential_kwargs(self.api_key, self.api_base))

        if tools:
            kwargs["tools"] = [t.to_schema() for t in tools.values()]
            kwargs["tool_choice"] = "auto"

        response = await acompletion(**kwargs)
        return self._parse_response(response, schema)

    def _parse_response(self, response: Any, schema: type[BaseModel]) -> GenerationResult:
        """Parse LiteLLM response into our standard format."""
        choice = response.choices[0]
        message = choice.message

        tool_calls = []
        if getattr(message, "tool_calls", None):
            for tc in message.tool_calls:
                # Parse arguments from JSON string if needed
                args = tc.function.arguments
                raw = None
                if isinstance(args, str):
                    try:
                        args = json.loads(args) if args else {}
                    except (ValueError, RecursionError):
                        # Undecodable arguments are forwarded verbatim
                        args, raw = {}, args

                tool_calls.append(ToolCallRequest(
                    id=tc.id,
                    name=tc.function.name,
                    arguments=args,
                    raw_arguments=raw,
                ))

        content = message.content or ""
        return GenerationResult(
            object=None if tool_calls else self._extract_object(content, schema),
            tool_calls=tool_calls,
            text=content,
            finish_reason=choice.finish_reason or "stop",
            usage=_parse_usage(response),
        )

    def _extract_object(self, content: str, schema: type[BaseModel]) -> BaseModel | None:
        """Validate model output against *schema*; ``None`` when it does not conform."""
        text = content.strip()
        if not text:
            return None
        # Strip markdown fences some providers wrap around JSON.
        fenced = _FENCE_RE.match(text)
        if fenced:
            text = fenced.group(1)
        try:
            return schema.model_validate_json(text)
        except ValidationError as e:
            logger.debug(f"Output of {self.model} does not match {schema.__name__}: {e.error_count()} error(s)")
            return None


class LiteLLMEmbeddingProvider(EmbeddingProvider):
    """Embedding handle using LiteLLM."""

    async def embed(self, texts: Sequence[str]) -> EmbeddingResult:
        if not texts:
            return EmbeddingResult(embeddings=[], model=self.model)

        response = await aembedding(
            model=self.model,
            input=list(texts),
            **_credential_kwargs(self.api_key, self.api_base),
        )
        vectors = []
        for item in response.data:
            vector = item["embedding"] if isinstance(item, dict) else item.embedding
            vectors.append(list(vector))
        return EmbeddingResult(
            embeddings=vectors,
            model=getattr(response, "model", None) or self.model,
            usage=_parse_usage(response),
        )

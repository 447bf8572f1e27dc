"""LLM provider abstraction module."""

from voxroute.providers.base import (
    EmbeddingProvider,
    EmbeddingResult,
    GenerationResult,
    LLMProvider,
    ToolCallRequest,
    ToolDefinition,
)
from voxroute.providers.litellm_provider import LiteLLMEmbeddingProvider, LiteLLMProvider
from voxroute.providers.registry import ProviderKind, create_embedding_model, create_model

__all__ = [
    "EmbeddingProvider",
    "EmbeddingResult",
    "GenerationResult",
    "LLMProvider",
    "LiteLLMEmbeddingProvider",
    "LiteLLMProvider",
    "ProviderKind",
    "ToolCallRequest",
    "ToolDefinition",
    "create_embedding_model",
    "create_model",
]

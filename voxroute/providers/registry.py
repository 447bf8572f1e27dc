"""
Provider registry: single source of truth for provider dispatch.

Adding a provider is one ``ProviderSpec`` entry. Any provider name that is
not registered falls through to ``ProviderKind.COMPATIBLE``, a generic
OpenAI-protocol endpoint that must be given an explicit ``base_url``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from voxroute.config.schema import TaskConfig
from voxroute.errors import EmbeddingNotSupportedError, UnknownProviderError
from voxroute.providers.base import EmbeddingProvider, LLMProvider


class ProviderKind(str, Enum):
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GOOGLE = "google"
    OLLAMA = "ollama"
    COMPATIBLE = "compatible"


@dataclass(frozen=True)
class ProviderSpec:
    """One LLM provider's dispatch metadata."""

    kind: ProviderKind
    litellm_prefix: str               # "anthropic" → model becomes anthropic/{model}
    default_api_base: str = ""        # used when the task sets no base_url
    default_api_key: str = ""         # placeholder for keyless local servers
    requires_api_base: bool = False
    supports_embeddings: bool = True

    @property
    def label(self) -> str:
        return self.kind.value


PROVIDERS: tuple[ProviderSpec, ...] = (
    ProviderSpec(
        kind=ProviderKind.ANTHROPIC,
        litellm_prefix="anthropic",
        supports_embeddings=False,
    ),
    ProviderSpec(
        kind=ProviderKind.OPENAI,
        litellm_prefix="openai",
    ),
    ProviderSpec(
        kind=ProviderKind.GOOGLE,
        litellm_prefix="gemini",
    ),
    # Ollama exposes an OpenAI-compatible API and ignores the key.
    ProviderSpec(
        kind=ProviderKind.OLLAMA,
        litellm_prefix="openai",
        default_api_base="http://localhost:11434/v1",
        default_api_key="ollama",
    ),
    ProviderSpec(
        kind=ProviderKind.COMPATIBLE,
        litellm_prefix="openai",
        requires_api_base=True,
    ),
)

_BY_KIND: dict[ProviderKind, ProviderSpec] = {spec.kind: spec for spec in PROVIDERS}


def find_provider(name: str) -> ProviderSpec:
    """Look up a provider by configured name; unknown names are COMPATIBLE."""
    try:
        kind = ProviderKind(name.strip().lower())
    except ValueError:
        kind = ProviderKind.COMPATIBLE
    return _BY_KIND[kind]


@dataclass(frozen=True)
class ResolvedEndpoint:
    model: str
    api_key: str | None
    api_base: str | None


def resolve_endpoint(task: TaskConfig) -> tuple[ProviderSpec, ResolvedEndpoint]:
    """Apply provider rules to a task profile.

    Raises:
        UnknownProviderError: a custom provider has no ``base_url``.
    """
    spec = find_provider(task.provider)
    api_base = task.base_url or spec.default_api_base or None
    if spec.requires_api_base and not api_base:
        raise UnknownProviderError(task.provider.lower())

    model = task.model
    if spec.litellm_prefix and not model.startswith(f"{spec.litellm_prefix}/"):
        model = f"{spec.litellm_prefix}/{model}"

    api_key = task.api_key or spec.default_api_key or None
    return spec, ResolvedEndpoint(model=model, api_key=api_key, api_base=api_base)


def create_model(task: TaskConfig) -> LLMProvider:
    """Build a generation handle for *task*."""
    from voxroute.providers.litellm_provider import LiteLLMProvider

    _, endpoint = resolve_endpoint(task)
    return LiteLLMProvider(
        model=endpoint.model,
        api_key=endpoint.api_key,
        api_base=endpoint.api_base,
    )


def create_embedding_model(task: TaskConfig) -> EmbeddingProvider:
    """Build an embedding handle for *task*.

    Raises:
        EmbeddingNotSupportedError: the provider has no embedding API.
    """
    from voxroute.providers.litellm_provider import LiteLLMEmbeddingProvider

    spec = find_provider(task.provider)
    if not spec.supports_embeddings:
        raise EmbeddingNotSupportedError(task.provider.lower())

    _, endpoint = resolve_endpoint(task)
    return LiteLLMEmbeddingProvider(
        model=endpoint.model,
        api_key=endpoint.api_key,
        api_base=endpoint.api_base,
    )

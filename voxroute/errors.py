"""Exception hierarchy for voxroute."""

from __future__ import annotations


class VoxrouteError(Exception):
    """Base class for all voxroute errors."""


class ConfigError(VoxrouteError):
    """Raised when the adapter configuration is missing or malformed."""


class MissingTaskConfigError(VoxrouteError):
    """Raised when no task profile is configured for a routing key.

    Carries the requested key and the sorted list of configured keys so
    operators can fix the configuration from the message alone.
    """

    def __init__(self, event_type: str, available_tasks: list[str]) -> None:
        self.event_type = event_type
        self.available_tasks = sorted(available_tasks)
        configured = ", ".join(self.available_tasks) or "(none)"
        super().__init__(
            f"No configuration for event_type '{event_type}'. "
            f"Configured tasks: {configured}"
        )


class UnknownProviderError(VoxrouteError):
    """Raised when a custom provider is configured without a base_url."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(
            f'Unknown provider "{provider}". For custom providers, set base_url.'
        )


class EmbeddingNotSupportedError(VoxrouteError):
    """Raised when the embedding task points at a chat-only provider."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f'Provider "{provider}" does not support embeddings')

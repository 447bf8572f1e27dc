"""Per-task model routing.

Each inbound event type maps to a task key (``user_intent``,
``history_summary``, ...). The router turns a task key into a model handle
plus its task profile, building handles lazily and caching them for the
lifetime of the process. Configuration is never hot-reloaded, so entries are
never evicted.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from voxroute.config.schema import Config, TaskConfig
from voxroute.errors import MissingTaskConfigError
from voxroute.providers.base import EmbeddingProvider, LLMProvider
from voxroute.providers.registry import create_embedding_model, create_model

DEFAULT_TASK_KEY = "user_intent"
EMBEDDING_TASK_KEY = "embedding"

_EVENT_TYPE_PREFIX = "EVENT_TYPE_"


def event_type_to_config_key(event_type: str | None) -> str:
    """Map a wire event type (``EVENT_TYPE_USER_INTENT``) to a task key.

    ``EVENT_TYPE_UNSPECIFIED``, empty and unrecognised values map to ``""``,
    which the router resolves to the default task.
    """
    if not event_type or not event_type.startswith(_EVENT_TYPE_PREFIX):
        return ""
    stripped = event_type[len(_EVENT_TYPE_PREFIX):].lower()
    if stripped == "unspecified":
        return ""
    return stripped


@dataclass(frozen=True, slots=True)
class Route:
    """A cached (model handle, task profile) pair."""
    model: LLMProvider
    task_config: TaskConfig


@dataclass(frozen=True, slots=True)
class EmbeddingRoute:
    model: EmbeddingProvider
    task_config: TaskConfig


class TaskRouter:
    """Resolve task keys to model handles, building each handle at most once.

    Concurrent misses on the same key may each construct a handle; the first
    insert wins and every caller gets the stored pair back.
    """

    def __init__(
        self,
        config: Config,
        model_factory: Callable[[TaskConfig], LLMProvider] = create_model,
        embedding_factory: Callable[[TaskConfig], EmbeddingProvider] = create_embedding_model,
    ) -> None:
        self._config = config
        self._model_factory = model_factory
        self._embedding_factory = embedding_factory
        self._routes: dict[str, Route] = {}
        self._embedding_route: EmbeddingRoute | None = None
        self._lock = threading.Lock()

    @property
    def config(self) -> Config:
        return self._config

    @staticmethod
    def normalize_key(raw_key: str) -> str:
        """Empty keys select the default task."""
        return raw_key or DEFAULT_TASK_KEY

    def _task_config(self, key: str) -> TaskConfig:
        task = self._config.tasks.get(key)
        if task is None:
            raise MissingTaskConfigError(key, list(self._config.tasks))
        return task

    def resolve(self, raw_key: str) -> Route:
        """Return the model handle and task profile for *raw_key*.

        Raises:
            MissingTaskConfigError: no task is configured for the key.
            UnknownProviderError: the task's provider cannot be built.
        """
        key = self.normalize_key(raw_key)
        with self._lock:
            cached = self._routes.get(key)
        if cached is not None:
            return cached

        task = self._task_config(key)
        route = Route(model=self._model_factory(task), task_config=task)

        with self._lock:
            existing = self._routes.get(key)
            if existing is not None:
                return existing
            self._routes[key] = route

        logger.info(f"Model created for task '{key}': provider={task.provider}, model={task.model}")
        return route

    def resolve_embedding(self) -> EmbeddingRoute:
        """Return the embedding handle configured under the ``embedding`` task.

        Raises:
            MissingTaskConfigError: no ``embedding`` task is configured.
            EmbeddingNotSupportedError: the provider has no embedding API.
        """
        with self._lock:
            cached = self._embedding_route
        if cached is not None:
            return cached

        task = self._task_config(EMBEDDING_TASK_KEY)
        route = EmbeddingRoute(model=self._embedding_factory(task), task_config=task)

        with self._lock:
            if self._embedding_route is not None:
                return self._embedding_route
            self._embedding_route = route

        logger.info(f"Embedding model created: provider={task.provider}, model={task.model}")
        return route

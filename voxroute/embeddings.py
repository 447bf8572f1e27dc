"""Embedding service: soft-fail wrapper around the ``embedding`` task."""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from voxroute.intent.models import EmbeddingResponse
from voxroute.routing import TaskRouter


class EmbeddingService:
    """Embed texts with the model configured under the ``embedding`` task.

    Failures never escape: they are reported through ``error_message`` with
    zero embeddings.
    """

    def __init__(self, router: TaskRouter) -> None:
        self._router = router

    async def embed(self, texts: Sequence[str]) -> EmbeddingResponse:
        try:
            route = self._router.resolve_embedding()
            result = await route.model.embed(texts)
        except Exception as e:
            logger.error(f"Embedding error: {e}")
            return EmbeddingResponse(error_message=str(e) or type(e).__name__)

        logger.info(
            f"Embedded {len(result.embeddings)} text(s) with {result.model} "
            f"(tokens={result.usage.get('total_tokens', 0)})"
        )
        return EmbeddingResponse(embeddings=result.embeddings, model=result.model)

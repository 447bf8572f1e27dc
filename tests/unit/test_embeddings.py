"""Unit tests for the soft-failing embedding service."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from voxroute.embeddings import EmbeddingService
from voxroute.providers.base import EmbeddingProvider, EmbeddingResult
from voxroute.routing import TaskRouter


@pytest.mark.asyncio
async def test_missing_embedding_task_is_soft(config):
    response = await EmbeddingService(TaskRouter(config)).embed(["hello"])

    assert response.embeddings == []
    assert "embedding" in response.error_message


@pytest.mark.asyncio
async def test_unsupported_provider_is_soft(build_config):
    config = build_config({"embedding": ("anthropic", "claude-sonnet-4-5")})

    response = await EmbeddingService(TaskRouter(config)).embed(["hello"])

    assert response.embeddings == []
    assert "anthropic" in response.error_message


@pytest.mark.asyncio
async def test_provider_failure_is_soft(build_config):
    config = build_config({"embedding": ("openai", "text-embedding-3-small")})
    model = MagicMock(spec=EmbeddingProvider)
    model.embed = AsyncMock(side_effect=RuntimeError("quota exceeded"))
    router = TaskRouter(config, embedding_factory=lambda task: model)

    response = await EmbeddingService(router).embed(["hello"])

    assert response.embeddings == []
    assert response.error_message == "quota exceeded"


@pytest.mark.asyncio
async def test_embeddings_returned(build_config):
    config = build_config({"embedding": ("openai", "text-embedding-3-small")})
    model = MagicMock(spec=EmbeddingProvider)
    model.embed = AsyncMock(return_value=EmbeddingResult(embeddings=[[1.0, 0.0]], model="te3s"))
    router = TaskRouter(config, embedding_factory=lambda task: model)

    response = await EmbeddingService(router).embed(["hello"])

    assert response.embeddings == [[1.0, 0.0]]
    assert response.model == "te3s"
    assert response.error_message == ""
    model.embed.assert_awaited_once_with(["hello"])


@pytest.mark.asyncio
async def test_token_usage_is_logged(build_config, log_messages):
    config = build_config({"embedding": ("openai", "text-embedding-3-small")})
    model = MagicMock(spec=EmbeddingProvider)
    model.embed = AsyncMock(return_value=EmbeddingResult(
        embeddings=[[1.0]], model="te3s", usage={"total_tokens": 7},
    ))
    router = TaskRouter(config, embedding_factory=lambda task: model)

    await EmbeddingService(router).embed(["hello"])

    assert any("with te3s (tokens=7)" in m for m in log_messages)

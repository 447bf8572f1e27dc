"""Embeddings API – vectors from the ``embedding`` task."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from voxroute.embeddings import EmbeddingService
from voxroute.intent.models import EmbeddingRequest, EmbeddingResponse

router = APIRouter()


def get_embedding_service(request: Request) -> EmbeddingService:
    return request.app.state.embedding_service


EmbeddingServiceDep = Annotated[EmbeddingService, Depends(get_embedding_service)]


@router.post("", response_model=EmbeddingResponse)
async def embed(body: EmbeddingRequest, service: EmbeddingServiceDep) -> EmbeddingResponse:
    return await service.embed(body.texts)

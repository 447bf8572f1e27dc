"""Liveness endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> dict[str, object]:
    return {"status": "ok", "tasks": request.app.state.config.task_names}

"""FastAPI application factory with lifespan for voxroute."""

from __future__ import annotations

from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from loguru import logger

from voxroute import __version__
from voxroute.config.loader import load_config
from voxroute.config.schema import Config
from voxroute.embeddings import EmbeddingService
from voxroute.intent.engine import IntentService
from voxroute.routing import TaskRouter
from voxroute.settings import get_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: report configured tasks."""
    config: Config = app.state.config
    logger.info(
        f"Starting AI adapter: {len(config.tasks)} task(s) configured "
        f"[{', '.join(config.tasks)}], language={config.language}"
    )
    yield
    logger.info("AI adapter shutting down")


def create_app(config: Config | None = None, router: TaskRouter | None = None) -> FastAPI:
    settings = get_settings()
    config = config or (router.config if router else load_config())
    router = router or TaskRouter(config)

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.router = router
    app.state.intent_service = IntentService(router)
    app.state.embedding_service = EmbeddingService(router)

    # ── mount routers ──
    from voxroute.api.routes import embeddings, health, intent

    app.include_router(health.router)
    app.include_router(intent.router, prefix="/api/v1/intent", tags=["intent"])
    app.include_router(embeddings.router, prefix="/api/v1/embeddings", tags=["embeddings"])

    return app

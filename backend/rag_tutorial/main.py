"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rag_tutorial.config import get_settings
from rag_tutorial.infrastructure.logging.log_config import setup_logging
from rag_tutorial.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging.

    No database is opened here: every request carries its own connection
    descriptor and gets a short-lived engine.
    """
    settings = get_settings()
    setup_logging()
    logger.info(
        "%s %s starting (env=%s, ollama=%s, model=%s)",
        settings.app_title,
        settings.app_version,
        settings.app_env,
        settings.ollama_base_url,
        settings.ollama_model,
    )
    if not settings.jina_api_key.strip():
        logger.warning(
            "JINA_API_KEY is not configured; segmentation, embeddings and reranking may be rate limited or rejected."
        )

    yield

    logger.info("Shutting down")


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rag_tutorial.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )

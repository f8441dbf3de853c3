from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from research_assistant.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Log the effective deployment on startup.

    A missing LLM credential is not fatal: the service still answers health
    checks and every summarize call fails fast with a 500.
    """
    settings = getattr(app.state, "settings", None)
    if not isinstance(settings, Settings):
        settings = get_settings()

    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; /summarize will fail until it is configured")

    logger.info(
        "Summary gateway ready",
        extra={
            "port": settings.port,
            "model": settings.openai_model,
            "app_env": settings.app_env,
            "health_url": f"http://localhost:{settings.port}/health",
        },
    )
    try:
        yield
    finally:
        logger.info("Summary gateway stopping")

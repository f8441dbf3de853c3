"""API routers."""

from research_assistant.api.routers.meta import router as meta_router
from research_assistant.api.routers.summaries import router as summaries_router

__all__ = ["meta_router", "summaries_router"]

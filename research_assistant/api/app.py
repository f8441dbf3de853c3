from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from research_assistant.api import __version__
from research_assistant.api.routers import meta_router, summaries_router
from research_assistant.core.config import Settings, get_settings
from research_assistant.core.errors import AppError
from research_assistant.core.handlers import handle_app_error, handle_unexpected_error, handle_validation_error
from research_assistant.core.lifespan import lifespan
from research_assistant.core.logging import setup_logging
from research_assistant.core.middleware import log_requests

STATIC_PREFIX = "/static"


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Application factory for creating FastAPI instances.

    Args:
        settings: Optional settings override. If None, loads from environment.
                  Useful for testing with custom configuration.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Research Assistant",
        description="Summarizes the page a bookmarklet was clicked on",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(meta_router)
    app.include_router(summaries_router)
    app.state.settings = settings

    if settings.static_dir.is_dir():
        app.mount(STATIC_PREFIX, StaticFiles(directory=settings.static_dir), name="static")

    app.add_middleware(BaseHTTPMiddleware, dispatch=log_requests)
    if settings.cors_allow_origins:
        # Added last so it wraps everything, including the 413 from log_requests.
        # Bookmarklets post from whatever page is open, hence the wide default.
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["Content-Type", "Authorization"],
        )
    app.add_exception_handler(AppError, handle_app_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app


# Initialize logging once at module load
setup_logging()

# Default app instance for uvicorn (uvicorn research_assistant.api.app:app)
app = create_app()

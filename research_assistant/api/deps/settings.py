from __future__ import annotations

from fastapi import Request

from research_assistant.core.config import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings bound to the running app, so `create_app(settings)` overrides apply."""
    return request.app.state.settings

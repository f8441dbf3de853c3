from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest
from fastapi.testclient import TestClient

from research_assistant.api.app import create_app
from research_assistant.core.config import Settings

PROSE = (
    "Urban beekeeping has grown steadily over the past decade as city dwellers look for ways to "
    "support pollinators. Rooftop hives now appear on offices, schools and apartment blocks. "
    "Researchers caution that adding managed honeybees does not automatically help wild bees, "
    "which compete for the same flowers. Several city councils have responded by funding native "
    "plantings along streets and in parks, which benefit both groups. Beekeepers report that urban "
    "honey yields are often higher than rural ones because of the variety of garden plants and the "
    "absence of large pesticide treated fields. Still, disease spreads quickly when hives are dense, "
    "so local associations run inspection programs and training courses for newcomers. The article "
    "concludes that thoughtful planning, shared data and public education matter more than the raw "
    "number of hives. It recommends that cities track hive density, plant diverse forage, and "
    "coordinate with researchers before launching new programs."
)

SUMMARY = {
    "title": "Urban Beekeeping",
    "summary": "Cities are adding hives, but wild bees need forage too.",
    "key_points": [
        {"point": "Rooftop hives are spreading across cities", "confidence": "high"},
        {"point": "Honeybees compete with wild bees for flowers", "confidence": "medium"},
        {"point": "Planned forage matters more than hive counts", "confidence": "low"},
    ],
}


@pytest.fixture
def prose() -> str:
    return PROSE


@pytest.fixture
def summary() -> dict[str, Any]:
    return json.loads(json.dumps(SUMMARY))


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    static_dir = tmp_path / "static"
    static_dir.mkdir()
    (static_dir / "bookmarklet.js").write_text("console.log('ok');", encoding="utf-8")
    return Settings(openai_api_key="test-key", static_dir=static_dir, app_env="local")


@pytest.fixture
def make_client() -> Callable[[Settings], TestClient]:
    def _make(settings: Settings) -> TestClient:
        return TestClient(create_app(settings))

    return _make


@pytest.fixture
def test_client(settings: Settings, make_client: Callable[[Settings], TestClient]) -> TestClient:
    return make_client(settings)


class FakeCompletions:
    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    """Stands in for AsyncOpenAI; records constructor and create() arguments."""

    instances: list[FakeOpenAI] = []
    completions = FakeCompletions()

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self.chat = SimpleNamespace(completions=type(self).completions)
        self.closed = False
        type(self).instances.append(self)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_openai(monkeypatch: pytest.MonkeyPatch) -> Callable[..., type[FakeOpenAI]]:
    def _install(content: str | None = None, error: Exception | None = None) -> type[FakeOpenAI]:
        fake = type("InstalledFakeOpenAI", (FakeOpenAI,), {"instances": [], "completions": FakeCompletions(content, error)})
        monkeypatch.setattr("research_assistant.services.summarizer.AsyncOpenAI", fake)
        return fake

    return _install

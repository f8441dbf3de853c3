"""Overlay bodies and the copy/export renditions of a summary."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from html import escape
from pathlib import Path

from research_assistant.schemas.summaries import KeyPoint, SummaryResult

logger = logging.getLogger(__name__)

CONFIDENCE_COLORS = {
    "high": "#28a745",
    "medium": "#ffc107",
    "low": "#6c757d",
}
ATTRIBUTION = "\n\n---\nGenerated by AI Research Assistant"
PANEL_HEADING = "AI Research Summary"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def confidence_color(tier: object) -> str:
    if isinstance(tier, str) and tier in CONFIDENCE_COLORS:
        return CONFIDENCE_COLORS[tier]
    return CONFIDENCE_COLORS["low"]


def key_points(result: SummaryResult) -> list[KeyPoint]:
    """Key points as objects; bare strings from a lenient reply become points."""
    points: list[KeyPoint] = []
    for item in result.key_points:
        if isinstance(item, KeyPoint):
            points.append(item)
        elif isinstance(item, dict):
            points.append(KeyPoint.model_validate(item))
        else:
            points.append(KeyPoint(point=str(item)))
    return points


def to_markdown(result: SummaryResult, *, attribution: bool = False) -> str:
    lines = "\n".join(
        f"{index}. {point.point} ({point.confidence} confidence)"
        for index, point in enumerate(key_points(result), start=1)
    )
    markdown = f"# {result.title}\n\n## Summary\n{result.summary}\n\n## Key Points\n{lines}"
    if attribution:
        markdown += ATTRIBUTION
    return markdown


def export_filename(title: str) -> str:
    return f"{_UNSAFE_FILENAME_CHARS.sub('_', title).lower()}_summary.md"


def render_loading_html() -> str:
    return '<div class="ra-overlay ra-loading"><div class="ra-spinner"></div><div>Analyzing page content...</div></div>'


def render_error_html(message: str) -> str:
    return (
        '<div class="ra-overlay ra-error">'
        f"<div>Error: {escape(message)}</div>"
        '<button type="button" data-action="close">Close</button>'
        "</div>"
    )


def render_panel_html(result: SummaryResult) -> str:
    rows = "".join(
        f'<div class="ra-point" style="border-left: 3px solid {confidence_color(point.confidence)};">'
        f"<div>{escape(point.point)}</div>"
        f"<div>Confidence: {escape(point.confidence)}</div>"
        "</div>"
        for point in key_points(result)
    )
    return (
        '<div class="ra-overlay ra-result">'
        f'<div class="ra-header"><h3>{PANEL_HEADING}</h3>'
        '<button type="button" data-action="close">&times;</button></div>'
        '<div class="ra-body">'
        f"<h4>{escape(result.title)}</h4>"
        f"<div>{escape(result.summary)}</div>"
        f"<h4>Key Insights</h4>{rows}"
        "</div>"
        '<div class="ra-footer">'
        '<button type="button" data-action="copy">Copy Summary</button>'
        '<button type="button" data-action="export">Export</button>'
        "</div>"
        "</div>"
    )


ActionHandler = Callable[["ResultPanel"], object]


class ResultPanel:
    """A rendered summary plus the actions bound to this instance.

    Actions only use the summary already held in memory; none of them touch
    the network.
    """

    def __init__(self, result: SummaryResult) -> None:
        self.result = result
        self.html = render_panel_html(result)
        self._handlers: dict[str, ActionHandler] = {}

    def on(self, action: str, handler: ActionHandler) -> None:
        self._handlers[action] = handler

    def trigger(self, action: str) -> object:
        handler = self._handlers.get(action)
        if handler is None:
            raise KeyError(f"No handler registered for {action!r}")
        return handler(self)

    def copy_markdown(self, clipboard: Callable[[str], object]) -> str:
        text = to_markdown(self.result)
        clipboard(text)
        logger.info("Summary copied", extra={"chars": len(text)})
        return text

    def export_markdown(self, directory: Path) -> Path:
        path = Path(directory) / export_filename(self.result.title)
        path.write_text(to_markdown(self.result, attribution=True), encoding="utf-8")
        logger.info("Summary exported", extra={"path": str(path)})
        return path

    @classmethod
    def with_default_actions(
        cls,
        result: SummaryResult,
        *,
        clipboard: Callable[[str], object],
        export_dir: Path,
    ) -> ResultPanel:
        panel = cls(result)
        panel.on("copy", lambda p: p.copy_markdown(clipboard))
        panel.on("export", lambda p: p.export_markdown(export_dir))
        return panel

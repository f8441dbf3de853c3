from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import httpx
from pydantic import ValidationError

from research_assistant.page.extractor import PageContent, extract_page_content
from research_assistant.page.overlay import Overlay
from research_assistant.page.renderer import ResultPanel
from research_assistant.schemas.summaries import SummaryResult

logger = logging.getLogger(__name__)

NOT_ENOUGH_CONTENT_MESSAGE = "Not enough content found on this page to summarize."
SERVER_ERROR_MESSAGE = "Failed to get response from server"
CONNECTION_ERROR_MESSAGE = "Failed to connect to summarization service"


class GatewayError(Exception):
    """The summary gateway could not produce a summary for this page."""


class PageSummarizer:
    """Page-side flow: extract, check, post to the gateway, show the result.

    One `run` is one bookmarklet click. The overlay handle is owned by the
    caller so repeated clicks on the same page toggle the same overlay.
    """

    def __init__(
        self,
        gateway_url: str,
        *,
        http_client: httpx.Client | None = None,
        clipboard: Callable[[str], object] = print,
        export_dir: Path | None = None,
    ) -> None:
        self.gateway_url = gateway_url.rstrip("/")
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.Client()
        self.clipboard = clipboard
        self.export_dir = export_dir or Path.cwd()

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self.http_client.close()

    def __enter__(self) -> PageSummarizer:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def fetch_page(self, url: str) -> str:
        response = self.http_client.get(url, follow_redirects=True)
        response.raise_for_status()
        return response.text

    def request_summary(self, content: PageContent) -> SummaryResult:
        try:
            response = self.http_client.post(f"{self.gateway_url}/summarize", json=content.to_payload())
        except httpx.HTTPError as exc:
            raise GatewayError(CONNECTION_ERROR_MESSAGE) from exc

        if response.is_error:
            raise GatewayError(self._error_message(response))

        try:
            return SummaryResult.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise GatewayError(SERVER_ERROR_MESSAGE) from exc

    def run(self, html: str, url: str, overlay: Overlay | None = None) -> Overlay:
        overlay = overlay if overlay is not None else Overlay()
        if not overlay.begin():
            return overlay
        run_id = overlay.run_id

        content = extract_page_content(html, url)
        if not content.is_summarizable:
            logger.info("Page text too short to summarize", extra={"url": url, "chars": len(content.text)})
            overlay.show_error(NOT_ENOUGH_CONTENT_MESSAGE, run_id)
            return overlay

        try:
            result = self.request_summary(content)
        except GatewayError as exc:
            logger.error("Summarization error: %s", exc, extra={"url": url})
            overlay.show_error(str(exc), run_id)
            return overlay

        panel = ResultPanel.with_default_actions(result, clipboard=self.clipboard, export_dir=self.export_dir)
        panel.on("close", lambda _panel: overlay.dismiss())
        overlay.show_result(panel, run_id)
        return overlay

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return SERVER_ERROR_MESSAGE
        if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
            return body["error"]
        return SERVER_ERROR_MESSAGE

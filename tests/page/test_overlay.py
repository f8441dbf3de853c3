from __future__ import annotations

from research_assistant.core.config import DEFAULT_STATIC_DIR
from research_assistant.page.overlay import Overlay, OverlayState
from research_assistant.page.renderer import ResultPanel
from research_assistant.schemas.summaries import SummaryResult


def _panel(summary) -> ResultPanel:
    return ResultPanel(SummaryResult.model_validate(summary))


class TestOverlay:
    def test_begin_from_idle_enters_loading(self):
        overlay = Overlay()

        assert overlay.begin() is True
        assert overlay.state is OverlayState.LOADING
        assert overlay.visible

    def test_second_invocation_dismisses(self, summary):
        overlay = Overlay()
        overlay.begin()
        overlay.show_result(_panel(summary))

        assert overlay.begin() is False
        assert overlay.state is OverlayState.IDLE
        assert overlay.panel is None

    def test_dismiss_while_loading_drops_late_result(self, summary):
        overlay = Overlay()
        overlay.begin()
        assert overlay.begin() is False

        assert overlay.show_result(_panel(summary)) is False
        assert overlay.state is OverlayState.IDLE

    def test_error_replaces_loading(self):
        overlay = Overlay()
        overlay.begin()

        assert overlay.show_error("boom") is True
        assert overlay.state is OverlayState.ERROR
        assert overlay.message == "boom"

    def test_error_dismissed_by_next_invocation(self):
        overlay = Overlay()
        overlay.begin()
        overlay.show_error("boom")

        assert overlay.begin() is False
        assert overlay.message is None
        assert overlay.begin() is True

    def test_html_follows_state(self, summary):
        overlay = Overlay()
        assert overlay.html is None

        overlay.begin()
        assert "Analyzing page content..." in overlay.html

        overlay.show_error("No <luck>")
        assert "Error: No &lt;luck&gt;" in overlay.html

        overlay.dismiss()
        overlay.begin()
        panel = _panel(summary)
        overlay.show_result(panel)
        assert overlay.html == panel.html

    def test_reply_from_superseded_run_is_dropped(self, summary):
        overlay = Overlay()
        overlay.begin()
        first_run = overlay.run_id
        overlay.begin()  # dismiss while the first request is in flight
        overlay.begin()  # start a second run
        second_run = overlay.run_id

        assert overlay.show_result(_panel(summary), first_run) is False
        assert overlay.show_error("late failure", first_run) is False
        assert overlay.state is OverlayState.LOADING

        assert overlay.show_result(_panel(summary), second_run) is True
        assert overlay.state is OverlayState.SHOWING


class TestBrowserBundle:
    """The shipped bookmarklet follows the same run rules as `Overlay`."""

    def test_replies_checked_against_current_run(self):
        bundle = (DEFAULT_STATIC_DIR / "bookmarklet.js").read_text(encoding="utf-8")

        assert "overlay.state === 'loading' && overlay.run === run" in bundle
        assert "overlay.run = (overlay.run || 0) + 1;" in bundle
        assert "showResult(run, data);" in bundle
        assert "showError(run, error.message" in bundle

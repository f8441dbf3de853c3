from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from research_assistant.page.renderer import ResultPanel, render_error_html, render_loading_html

logger = logging.getLogger(__name__)


class OverlayState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    SHOWING = "showing"


@dataclass
class Overlay:
    """The single status/result overlay of one page.

    The caller owns the handle and passes it through the flow; at most one
    overlay body is visible at a time and each transition replaces the last.
    """

    state: OverlayState = OverlayState.IDLE
    message: str | None = None
    panel: ResultPanel | None = None
    # Bumped on every new run so a reply from an earlier run is recognised.
    run_id: int = 0

    @property
    def visible(self) -> bool:
        return self.state is not OverlayState.IDLE

    @property
    def html(self) -> str | None:
        """Markup of the body currently shown, or None when nothing is."""
        if self.state is OverlayState.LOADING:
            return render_loading_html()
        if self.state is OverlayState.ERROR:
            return render_error_html(self.message or "")
        if self.state is OverlayState.SHOWING and self.panel is not None:
            return self.panel.html
        return None

    def begin(self) -> bool:
        """Start a run, or dismiss the visible overlay instead.

        Returns True when the caller should go ahead and summarize. A second
        invocation while anything is showing only closes it; a request already
        in flight is not cancelled.
        """
        if self.visible:
            logger.debug("Overlay visible; dismissing instead of starting", extra={"state": self.state.value})
            self.dismiss()
            return False
        self.run_id += 1
        self._replace(OverlayState.LOADING)
        return True

    def show_error(self, message: str, run_id: int | None = None) -> bool:
        if not self._accepts(run_id):
            logger.info("Error arrived for a dismissed or superseded run; dropping it", extra={"error": message})
            return False
        self._replace(OverlayState.ERROR, message=message)
        return True

    def show_result(self, panel: ResultPanel, run_id: int | None = None) -> bool:
        """Display a finished summary unless the user already closed the overlay.

        Passing the `run_id` read after `begin` also drops the reply when a
        later click started a new run in the meantime.
        """
        if not self._accepts(run_id):
            logger.info("Summary arrived for a dismissed or superseded run; dropping it")
            return False
        self._replace(OverlayState.SHOWING, panel=panel)
        return True

    def _accepts(self, run_id: int | None) -> bool:
        if self.state is not OverlayState.LOADING:
            return False
        return run_id is None or run_id == self.run_id

    def dismiss(self) -> None:
        self._replace(OverlayState.IDLE)

    def _replace(
        self,
        state: OverlayState,
        *,
        message: str | None = None,
        panel: ResultPanel | None = None,
    ) -> None:
        self.state = state
        self.message = message
        self.panel = panel

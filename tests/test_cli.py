from __future__ import annotations

import pytest

from research_assistant import cli
from research_assistant.page.overlay import Overlay, OverlayState
from research_assistant.page.renderer import ResultPanel
from research_assistant.schemas.summaries import SummaryResult


class StubSummarizer:
    overlay = Overlay()

    def __init__(self, gateway_url, **kwargs):
        self.gateway_url = gateway_url
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True

    def fetch_page(self, url):
        return "<html></html>"

    def run(self, html, url):
        return self.overlay


class TestParser:
    def test_serve_defaults(self):
        args = cli.build_parser().parse_args(["serve"])
        assert args.handler is cli._serve
        assert args.port is None
        assert args.reload is False

    def test_summarize_args(self):
        args = cli.build_parser().parse_args(["summarize", "https://x.test", "--gateway", "http://gw", "--json"])
        assert args.url == "https://x.test"
        assert args.gateway == "http://gw"
        assert args.json is True

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])


class TestSummarizeCommand:
    def test_prints_markdown(self, monkeypatch, capsys, summary, tmp_path):
        overlay = Overlay(state=OverlayState.SHOWING)
        panel = ResultPanel.with_default_actions(
            SummaryResult.model_validate(summary), clipboard=print, export_dir=tmp_path
        )
        overlay.panel = panel
        monkeypatch.setattr(StubSummarizer, "overlay", overlay)
        monkeypatch.setattr(cli, "PageSummarizer", StubSummarizer)

        args = cli.build_parser().parse_args(["summarize", "https://x.test"])

        assert cli._summarize(args) == 0
        assert "# Urban Beekeeping" in capsys.readouterr().out

    def test_export_dir(self, monkeypatch, capsys, summary, tmp_path):
        overlay = Overlay(state=OverlayState.SHOWING)
        overlay.panel = ResultPanel(SummaryResult.model_validate(summary))
        monkeypatch.setattr(StubSummarizer, "overlay", overlay)
        monkeypatch.setattr(cli, "PageSummarizer", StubSummarizer)

        args = cli.build_parser().parse_args(["summarize", "https://x.test", "--export-dir", str(tmp_path)])

        assert cli._summarize(args) == 0
        assert (tmp_path / "urban_beekeeping_summary.md").exists()

    def test_error_exit_code(self, monkeypatch, capsys):
        monkeypatch.setattr(StubSummarizer, "overlay", Overlay(state=OverlayState.ERROR, message="nope"))
        monkeypatch.setattr(cli, "PageSummarizer", StubSummarizer)

        args = cli.build_parser().parse_args(["summarize", "https://x.test"])

        assert cli._summarize(args) == 1
        assert "Error: nope" in capsys.readouterr().err

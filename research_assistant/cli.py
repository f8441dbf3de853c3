from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

import httpx
import uvicorn
from dotenv import load_dotenv

from research_assistant.core.config import get_settings
from research_assistant.core.logging import setup_logging
from research_assistant.page.client import PageSummarizer
from research_assistant.page.overlay import OverlayState


def _serve(args: argparse.Namespace) -> int:
    settings = get_settings()
    uvicorn.run(
        "research_assistant.api.app:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
    )
    return 0


def _summarize(args: argparse.Namespace) -> int:
    settings = get_settings()
    with PageSummarizer(args.gateway or settings.gateway_url) as summarizer:
        try:
            html = summarizer.fetch_page(args.url)
        except httpx.HTTPError as exc:
            print(f"Error: could not load {args.url}: {exc}", file=sys.stderr)
            return 1
        overlay = summarizer.run(html, args.url)

    if overlay.state is OverlayState.ERROR:
        print(f"Error: {overlay.message}", file=sys.stderr)
        return 1

    assert overlay.panel is not None
    if args.json:
        print(json.dumps(overlay.panel.result.model_dump(), indent=2))
    elif args.export_dir:
        path = overlay.panel.export_markdown(Path(args.export_dir))
        print(f"Summary written to {path}")
    else:
        overlay.panel.trigger("copy")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="research-assistant", description="Summarize web pages with an LLM.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the summary gateway.")
    serve.add_argument("--host", default=None, help="Bind address (default: HOST or 0.0.0.0).")
    serve.add_argument("--port", type=int, default=None, help="Listen port (default: PORT or 3001).")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes (development).")
    serve.set_defaults(handler=_serve)

    summarize = subparsers.add_parser("summarize", help="Summarize a page through a running gateway.")
    summarize.add_argument("url", help="Page to load and summarize.")
    summarize.add_argument("--gateway", default=None, help="Gateway base URL (default: GATEWAY_URL).")
    summarize.add_argument("--export-dir", default=None, help="Write the markdown export into this directory.")
    summarize.add_argument("--json", action="store_true", help="Print the summary object as JSON.")
    summarize.set_defaults(handler=_summarize)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    load_dotenv()
    setup_logging()
    args = build_parser().parse_args(argv)
    sys.exit(args.handler(args))

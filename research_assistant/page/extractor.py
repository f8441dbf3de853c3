"""Visible-text extraction from a loaded page."""

from __future__ import annotations

import copy
from dataclasses import asdict, dataclass

from bs4 import BeautifulSoup, Tag

from research_assistant.application.guards import has_enough_text

CONTENT_SELECTORS = (
    "article",
    "main",
    '[role="main"]',
    ".content",
    ".post-content",
    ".article-content",
    ".entry-content",
    ".page-content",
)

EXCLUDE_SELECTORS = (
    "nav",
    "header",
    "footer",
    "aside",
    ".nav",
    ".navigation",
    ".menu",
    ".ad",
    ".ads",
    ".advertisement",
    ".sidebar",
    ".comments",
    ".comment-section",
    "script",
    "style",
    "noscript",
)

# Elements that start a new line when the page is rendered.
BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "dd", "details", "div", "dl", "dt",
        "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5",
        "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section", "summary",
        "table", "tr", "ul",
    }
)

DEFAULT_TITLE = "Untitled"


@dataclass(frozen=True)
class PageContent:
    title: str
    url: str
    text: str

    @property
    def is_summarizable(self) -> bool:
        return has_enough_text(self.text)

    def to_payload(self) -> dict[str, str]:
        return asdict(self)


def find_main_content(soup: BeautifulSoup) -> Tag:
    """First element matching the content selectors, else <body>, else the document."""
    for selector in CONTENT_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            return element
    return soup.body or soup


def rendered_text(root: Tag) -> str:
    """Approximate the text a browser would render for `root`.

    Works on `root` in place; pass a copy if the tree must survive.
    """
    for br in root.find_all("br"):
        br.replace_with("\n")
    for block in root.find_all(list(BLOCK_TAGS)):
        block.insert_before("\n")
        block.insert_after("\n")

    lines = (" ".join(line.split()) for line in root.get_text().split("\n"))
    return "\n".join(line for line in lines if line).strip()


def extract_page_content(document: str | BeautifulSoup, url: str = "") -> PageContent:
    soup = document if isinstance(document, BeautifulSoup) else BeautifulSoup(document, "html.parser")

    title = soup.title.get_text().strip() if soup.title else ""

    # Tag copies are deep and detached, so the caller's document is left alone.
    clone = copy.copy(find_main_content(soup))
    for selector in EXCLUDE_SELECTORS:
        for element in clone.select(selector):
            if not element.decomposed:
                element.decompose()

    return PageContent(title=title or DEFAULT_TITLE, url=url, text=rendered_text(clone))

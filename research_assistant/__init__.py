"""Bookmarklet-driven page summarizer: page-side extractor plus summary gateway."""

__version__ = "0.1.0"

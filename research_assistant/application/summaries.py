from __future__ import annotations

import logging
from typing import Any

from research_assistant.application.guards import validate_page_text
from research_assistant.core.config import Settings
from research_assistant.core.constants import UNKNOWN_FIELD
from research_assistant.core.errors import AppError, SummarizationError
from research_assistant.core.logging import log_context
from research_assistant.schemas.summaries import SummarizeRequest
from research_assistant.services.prompt import build_prompt
from research_assistant.services.response_parser import parse_summary
from research_assistant.services.summarizer import complete_prompt

logger = logging.getLogger(__name__)


async def summarize_page(request: SummarizeRequest, settings: Settings) -> dict[str, Any]:
    """Turn one page payload into a validated summary object.

    Every call is independent: one prompt, one completion, no retries.
    """
    text = validate_page_text(request.text)

    with log_context(page_url=str(request.url or UNKNOWN_FIELD)):
        logger.info("Processing summarize request", extra={"text_length": len(text)})
        try:
            prompt = build_prompt(text, request.title, request.url)
            raw = await complete_prompt(prompt, settings)
            summary = parse_summary(raw, strict=settings.strict_key_points)
        except AppError:
            raise
        except Exception as exc:
            raise SummarizationError(f"Unexpected summarization failure: {exc}") from exc
        logger.info("Summary generated", extra={"key_points": len(summary["key_points"])})

    return summary

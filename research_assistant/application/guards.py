from __future__ import annotations

from research_assistant.core.constants import MIN_TEXT_LENGTH, TEXT_REQUIRED_MESSAGE
from research_assistant.core.errors import InvalidRequestError


def has_enough_text(text: str | None) -> bool:
    return bool(text) and len(text.strip()) >= MIN_TEXT_LENGTH


def validate_page_text(text: str | None) -> str:
    if not has_enough_text(text):
        raise InvalidRequestError(TEXT_REQUIRED_MESSAGE)
    return text  # type: ignore[return-value]

"""Validation of the model's JSON reply."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from research_assistant.core.errors import SummarizationError
from research_assistant.schemas.summaries import StrictSummaryResult, SummaryResult

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON and cannot be relayed in a response body.
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_summary(raw: str, *, strict: bool = False) -> dict[str, Any]:
    """Parse the model output into a summary object.

    The returned dict is the model's object unchanged; validation only decides
    whether it is acceptable.

    Args:
        raw: Text content of the completion.
        strict: Also require 3-7 key points with a known confidence tier.

    Raises:
        SummarizationError: The text is not a JSON object or lacks the
            required fields. The raw text is logged, never attached.
    """
    try:
        parsed = json.loads(raw.strip(), parse_constant=_reject_constant)
    except ValueError as exc:
        logger.error("Failed to parse model output as JSON", extra={"output": raw})
        raise SummarizationError("Invalid response format from AI service") from exc

    if not isinstance(parsed, dict):
        logger.error("Model output is not a JSON object", extra={"output": raw})
        raise SummarizationError("Invalid response format from AI service")

    model = StrictSummaryResult if strict else SummaryResult
    try:
        model.model_validate(parsed)
    except ValidationError as exc:
        logger.warning(
            "Model output failed schema validation",
            extra={"errors": exc.error_count(), "strict": strict},
        )
        raise SummarizationError("Invalid response structure from AI service") from exc

    return parsed

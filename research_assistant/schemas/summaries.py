from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SummarizeRequest(BaseModel):
    """Page content as posted by the bookmarklet."""

    # Presence and length are checked by the summarize guard so that a missing
    # field and a short one get the same 400 body.
    text: str | None = None
    # Only embedded in the prompt, so any JSON value is accepted and stringified there.
    title: Any = None
    url: Any = None


class KeyPoint(BaseModel):
    model_config = ConfigDict(extra="allow")

    point: str = ""
    confidence: str = ""

    @field_validator("point", "confidence", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> object:
        # Lenient replies may carry null or non-string values here.
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        return str(value)


class SummaryResult(BaseModel):
    """Structured summary relayed from the model to the page."""

    model_config = ConfigDict(extra="allow")

    title: str = Field(min_length=1)
    summary: str = Field(min_length=1)
    key_points: list[Any]


class StrictKeyPoint(BaseModel):
    point: str = Field(min_length=1)
    confidence: Literal["high", "medium", "low"]


class StrictSummaryResult(SummaryResult):
    key_points: list[StrictKeyPoint] = Field(min_length=3, max_length=7)  # type: ignore[assignment]

from __future__ import annotations

from typing import Any

from openai import APIError, APIStatusError, AsyncOpenAI

from research_assistant.core.config import Settings
from research_assistant.core.constants import COMPLETION_MAX_TOKENS, COMPLETION_TEMPERATURE, SYSTEM_PROMPT
from research_assistant.core.errors import SummarizationError


def _upstream_message(exc: APIStatusError) -> str:
    """Pull the provider's own error message out of an error payload, if any."""
    body = exc.body
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
            return error["message"]
    return "Unknown error"


def create_client(settings: Settings) -> AsyncOpenAI:
    if not settings.openai_api_key:
        raise SummarizationError("OpenAI API key not configured")

    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        max_retries=0,
    )


async def complete_prompt(prompt: str, settings: Settings) -> str:
    """Send one system + user exchange and return the model's raw text."""
    client = create_client(settings)

    try:
        response = await client.chat.completions.create(
            model=settings.openai_model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=COMPLETION_TEMPERATURE,
            max_tokens=COMPLETION_MAX_TOKENS,
        )
    except APIStatusError as exc:
        raise SummarizationError(f"AI service error: {_upstream_message(exc)}") from exc
    except APIError as exc:
        raise SummarizationError("Failed to call AI service.") from exc
    finally:
        await client.close()

    content: Any = response.choices[0].message.content if response.choices else None
    if not isinstance(content, str) or not content.strip():
        raise SummarizationError("Empty response from AI service")

    return content.strip()

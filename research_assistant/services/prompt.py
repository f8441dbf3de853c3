from __future__ import annotations

from research_assistant.core.constants import MAX_PROMPT_TEXT_CHARS, TRUNCATION_MARKER, UNKNOWN_FIELD

PROMPT_TEMPLATE = """Please analyze this webpage content and provide a structured response:

WEBPAGE TITLE: {title}
WEBPAGE URL: {url}

CONTENT:
{content}

Please respond with ONLY a valid JSON object in this exact format:
{{
  "title": "The webpage title",
  "summary": "A concise 150-200 word summary of the main content",
  "key_points": [
    {{
      "point": "First key insight or finding",
      "confidence": "high|medium|low"
    }},
    {{
      "point": "Second key insight or finding",
      "confidence": "high|medium|low"
    }}
  ]
}}

Requirements:
- Summary should be 150-200 words, focusing on main points
- Include 3-7 key_points that are the most important insights
- Each key point should be specific and actionable
- Set confidence level based on how well supported each point is by the text
- Do not include any text outside the JSON object"""


def truncate_text(text: str, limit: int = MAX_PROMPT_TEXT_CHARS) -> str:
    """Cap page text at `limit` characters, marking the cut when one happens."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]} {TRUNCATION_MARKER}"


def build_prompt(text: str, title: object = None, url: object = None) -> str:
    # Title and URL arrive as whatever JSON the page sent.
    return PROMPT_TEMPLATE.format(
        title=str(title or UNKNOWN_FIELD),
        url=str(url or UNKNOWN_FIELD),
        content=truncate_text(text),
    )

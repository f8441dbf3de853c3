"""Application-wide constants."""

# ---------------------------------------------------------------------------
# Page content
# ---------------------------------------------------------------------------
MIN_TEXT_LENGTH = 100
MAX_PROMPT_TEXT_CHARS = 8000
TRUNCATION_MARKER = "...[truncated]"
UNKNOWN_FIELD = "Unknown"

TEXT_REQUIRED_MESSAGE = "Text content is required and must be at least 100 characters"
SUMMARY_FAILED_MESSAGE = "Failed to generate summary"

# ---------------------------------------------------------------------------
# Summarization
# ---------------------------------------------------------------------------
COMPLETION_TEMPERATURE = 0.3
COMPLETION_MAX_TOKENS = 1000

SYSTEM_PROMPT = (
    "You are a research assistant that extracts key insights from web content. "
    "Always respond with valid JSON only."
)

CONFIDENCE_TIERS = ("high", "medium", "low")
MIN_KEY_POINTS = 3
MAX_KEY_POINTS = 7

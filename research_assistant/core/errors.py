from research_assistant.core.constants import SUMMARY_FAILED_MESSAGE


class AppError(Exception):
    """Base class for all application errors."""

    status_code = 500
    code = "internal_error"
    # Message shown to clients for server-side failures; `detail` stays internal.
    public_message = "Internal server error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InvalidRequestError(AppError):
    """Client sent a malformed or invalid request (400)."""

    status_code = 400
    code = "invalid_request"


class RequestTooLargeError(AppError):
    """Request body exceeds the configured limit (413)."""

    status_code = 413
    code = "request_too_large"


class ExternalServiceError(AppError):
    """Upstream service failed or returned an invalid response (500)."""

    status_code = 500
    code = "external_service_error"


class SummarizationError(ExternalServiceError):
    """The LLM call failed or its reply did not match the summary shape."""

    code = "summarization_failed"
    public_message = SUMMARY_FAILED_MESSAGE

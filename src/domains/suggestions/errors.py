"""
Failure taxonomy for a single suggestion attempt. None of these are retried.
"""

from __future__ import annotations

HTTP_ERROR_MESSAGES: dict[int, str] = {
    400: "Bad Request - Invalid request format",
    401: "Unauthorized - Invalid API key",
    403: "Forbidden - API key lacks required permissions",
    404: "Not Found - Invalid API endpoint or model",
    429: "Rate Limit Exceeded - Too many requests, please wait",
    500: "Internal Server Error - Gemini API error",
    503: "Service Unavailable - Gemini API temporarily unavailable",
}


class SuggestionError(RuntimeError):
    """Base class; str(err) is the human-readable last-error text."""


class ConfigError(SuggestionError):
    """API key missing or configuration unusable."""


class EmptyInputError(SuggestionError):
    pass


class RateLimitedError(SuggestionError):
    """Daily or per-minute ceiling reached before calling the API."""


class TransportError(SuggestionError):
    """Network/TLS failure before any HTTP response arrived."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


class HttpError(SuggestionError):
    """Non-200 response from the Gemini API."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    @classmethod
    def from_response(cls, status_code: int, payload: object = None) -> HttpError:
        """
        Build the error with the fixed message for well-known codes, plus the
        `error.message` field of a JSON error body when one is present.
        """
        message = HTTP_ERROR_MESSAGES.get(status_code, f"HTTP error: {status_code}")
        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict) and error.get("message"):
                message += f" - {error['message']}"
        return cls(status_code, message)


class MalformedResponseError(SuggestionError):
    """HTTP 200 but the generated text is missing from the body."""

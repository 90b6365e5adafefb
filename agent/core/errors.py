from __future__ import annotations

from typing import Optional


class ChatError(Exception):
    """Base error for a failed chat request.

    ``status_code`` is the HTTP status surfaced to the caller and ``message``
    the text placed in the ``error`` field of the response body.
    """

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequestError(ChatError):
    status_code = 400
    default_message = "Messages must be an array"


class ConfigurationError(ChatError):
    status_code = 500
    default_message = "Model credentials not configured"


class RateLimitedError(ChatError):
    status_code = 429
    default_message = "Rate limit exceeded. Please wait a moment and try again."


class UpstreamValidationError(ChatError):
    status_code = 400
    default_message = "The model rejected the request"


class OutputLimitError(ChatError):
    status_code = 413
    default_message = "The conversation is too long for the model. Start a new chat or shorten your message."


class UpstreamError(ChatError):
    status_code = 500
    default_message = "Failed to get response from AI model"


class MalformedResponseError(ChatError):
    status_code = 500
    default_message = "Invalid response format from AI model"


_TOKEN_LIMIT_HINTS = (
    "max_tokens",
    "too long",
    "too many tokens",
    "token limit",
    "maximum context",
    "context length",
)


def mentions_token_limit(message: str) -> bool:
    lowered = (message or "").lower()
    return any(hint in lowered for hint in _TOKEN_LIMIT_HINTS)


def error_for_status(status: Optional[int], message: str = "") -> ChatError:
    """Translate an upstream HTTP status into the error surfaced to the caller."""
    if status == 429:
        return RateLimitedError()
    if status == 413 or (status == 400 and mentions_token_limit(message)):
        return OutputLimitError()
    if status in (400, 422):
        return UpstreamValidationError(f"Invalid request: {message}" if message else None)
    return UpstreamError()

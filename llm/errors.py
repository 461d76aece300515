"""
Errors raised by the dispatcher. Every one is terminal for the invocation.

The CLI catches LLMError and prints str(e) to stderr, so messages name the
provider and say what to fix.
"""


class LLMError(Exception):
    """Raised when a request cannot be built, sent, or understood."""

    def __init__(self, provider: str, message: str):
        super().__init__(message)
        self.provider = provider


class InvalidProvider(LLMError):
    def __init__(self, name: str, known: tuple[str, ...] = ()):
        message = f"Unknown provider: '{name}'."
        if known:
            message += f" Choose one of: {', '.join(known)}."
        super().__init__(name, message)


class MissingConfiguration(LLMError):
    def __init__(self, provider: str, field: str, detail: str = ""):
        message = f"{provider}: missing configuration '{field}'"
        if detail:
            message += f" ({detail})"
        super().__init__(provider, message)
        self.field = field


class InvalidRequest(LLMError):
    """Rejected before any network call (empty prompt, bad token limit, ...)."""

    def __init__(self, provider: str, reason: str):
        super().__init__(provider, f"{provider}: {reason}" if provider else reason)
        self.reason = reason


class TransportError(LLMError):
    def __init__(self, provider: str, endpoint: str, cause: str = ""):
        message = f"{provider}: request to {endpoint} failed"
        if cause:
            message += f": {cause}"
        super().__init__(provider, message)
        self.endpoint = endpoint


class InvalidResponse(LLMError):
    """The call completed but no text was found where the provider puts it."""

    def __init__(self, provider: str, raw_body: str, status_code: int | None = None):
        status = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(
            provider,
            f"{provider}: no text in response{status}. Raw body:\n{raw_body}",
        )
        self.raw_body = raw_body
        self.status_code = status_code

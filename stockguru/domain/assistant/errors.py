"""
Domain-specific errors for the assistant bounded context.

No framework imports allowed.
"""


class AssistantDomainError(Exception):
    """Base error for all assistant domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class LanguageModelUnavailableError(AssistantDomainError):
    """Raised when no language model provider could produce a completion."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Language model unavailable: {reason}")
        self.reason = reason

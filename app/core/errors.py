"""
Application errors for clean API error handling.

Use InvalidQueryError when the caller sent no usable query so the API can return
400 without contacting the provider. Provider failures are never raised; they are
returned as ProviderResult(success=False).
"""


class InvalidQueryError(ValueError):
    """Raised when a search query is absent, empty, or whitespace-only."""

    def __init__(self, message: str = "Query must not be empty") -> None:
        self.message = message
        super().__init__(message)

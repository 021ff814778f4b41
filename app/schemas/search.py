"""Schemas for the search endpoints."""

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from app.core.config import ERROR_MARKER


class Source(BaseModel):
    """A web source cited by a provider."""

    title: str = Field("", description="Title of the page or article.")
    url: str = Field("", description="URL of the source.")


class SearchRequest(BaseModel):
    """Request body for POST /api/search and POST /api/search/gemini."""

    query: str | None = Field(None, description="User question. Blank or missing returns 400.")

    model_config = {"json_schema_extra": {"examples": [{"query": "What is AI?"}]}}


class ProviderResult(BaseModel):
    """Normalized outcome of one provider call (answer or failure)."""

    model_config = ConfigDict(populate_by_name=True)

    provider: str = Field(..., description="Provider identifier, e.g. 'gemini'.")
    text: str = Field("", description="Answer text, or 'Error: ...' on failure.")
    sources: list[Source] = Field(default_factory=list, description="Cited sources (usually empty).")
    error: str | None = Field(None, description="Error message when success is false.")
    success: bool = Field(False, description="Whether the provider call succeeded.")
    response_time_ms: int = Field(0, ge=0, alias="responseTimeMs", description="Elapsed wall-clock time in ms.")

    @model_validator(mode="after")
    def _check_outcome(self) -> "ProviderResult":
        if self.success:
            if self.error:
                raise ValueError("successful result must not carry an error")
        else:
            if not self.error:
                raise ValueError("failed result requires a non-empty error")
            if not self.text.startswith(ERROR_MARKER):
                raise ValueError(f"failed result text must start with {ERROR_MARKER!r}")
        return self

    @computed_field(alias="latencyMs")  # type: ignore[prop-decorator]
    @property
    def latency_ms(self) -> int:
        """Same value as responseTimeMs; the frontend reads latencyMs."""
        return self.response_time_ms

    @classmethod
    def ok(cls, provider: str, text: str, elapsed_ms: int) -> "ProviderResult":
        return cls(provider=provider, text=text, success=True, error=None, response_time_ms=max(0, elapsed_ms))

    @classmethod
    def failed(cls, provider: str, message: str, elapsed_ms: int) -> "ProviderResult":
        message = message or "unknown error"
        return cls(
            provider=provider,
            text=f"{ERROR_MARKER}{message}",
            success=False,
            error=message,
            response_time_ms=max(0, elapsed_ms),
        )


class SearchResponse(BaseModel):
    """Response envelope for POST /api/search."""

    query: str = Field(..., description="Original query string.")
    results: list[ProviderResult] = Field(default_factory=list, description="One result per provider invoked.")
    timestamp: int = Field(..., description="Envelope construction time, epoch milliseconds.")

    @computed_field(alias="totalProviders")  # type: ignore[prop-decorator]
    @property
    def total_providers(self) -> int:
        """Number of providers invoked; always len(results)."""
        return len(self.results)

    @classmethod
    def wrap(cls, query: str, results: list[ProviderResult], timestamp: int) -> "SearchResponse":
        return cls(query=query, results=results, timestamp=timestamp)

"""
Unit tests for SearchService and the ProviderResult/SearchResponse models.
"""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from app.core.errors import InvalidQueryError
from app.schemas.search import ProviderResult, SearchResponse
from app.services.search_service import SearchService, validate_query


@pytest.fixture
def provider() -> MagicMock:
    fake = MagicMock()
    fake.provider = "gemini"
    fake.search.return_value = ProviderResult.ok("gemini", "answer", 12)
    return fake


class TestValidateQuery:
    @pytest.mark.parametrize("query", [None, "", " ", "\n\t "])
    def test_blank_raises(self, query) -> None:
        with pytest.raises(InvalidQueryError):
            validate_query(query)

    def test_keeps_query_as_given(self) -> None:
        assert validate_query("  What is AI? ") == "  What is AI? "


class TestSearchService:
    def test_search_all_wraps_single_result(self, provider: MagicMock) -> None:
        response = SearchService(provider).search_all("What is AI?")
        provider.search.assert_called_once_with("What is AI?")
        assert response.query == "What is AI?"
        assert response.total_providers == len(response.results) == 1
        assert response.results[0].text == "answer"
        assert response.timestamp > 0

    def test_search_all_blank_does_not_call_provider(self, provider: MagicMock) -> None:
        with pytest.raises(InvalidQueryError):
            SearchService(provider).search_all("   ")
        provider.search.assert_not_called()

    def test_search_single_returns_bare_result(self, provider: MagicMock) -> None:
        result = SearchService(provider).search_single("q")
        assert result is provider.search.return_value

    def test_failed_result_passes_through(self, provider: MagicMock) -> None:
        provider.search.return_value = ProviderResult.failed("gemini", "API returned status: 500", 3)
        response = SearchService(provider).search_all("q")
        assert response.results[0].success is False


class TestModels:
    def test_failed_sets_marker_and_error(self) -> None:
        result = ProviderResult.failed("gemini", "unexpected response structure", 5)
        assert result.success is False
        assert result.error == "unexpected response structure"
        assert result.text == "Error: unexpected response structure"

    def test_failed_never_has_empty_error(self) -> None:
        assert ProviderResult.failed("gemini", "", 0).error

    def test_elapsed_is_clamped_non_negative(self) -> None:
        assert ProviderResult.ok("gemini", "x", -4).response_time_ms == 0

    def test_serializes_camel_case_with_latency_mirror(self) -> None:
        data = ProviderResult.ok("gemini", "x", 42).model_dump(by_alias=True)
        assert data["responseTimeMs"] == 42
        assert data["latencyMs"] == 42

    def test_total_providers_matches_results(self) -> None:
        results = [ProviderResult.ok("gemini", "a", 1), ProviderResult.ok("gemini", "b", 2)]
        envelope = SearchResponse.wrap("q", results, timestamp=1)
        assert envelope.model_dump(by_alias=True)["totalProviders"] == 2

    def test_total_providers_follows_results_on_direct_construction(self) -> None:
        envelope = SearchResponse(query="q", results=[ProviderResult.ok("gemini", "a", 1)], timestamp=1)
        assert envelope.total_providers == 1
        assert envelope.model_dump(by_alias=True)["totalProviders"] == 1
        assert SearchResponse(query="q", timestamp=1).total_providers == 0

    def test_failed_without_error_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ProviderResult(provider="gemini", success=False)

    def test_failed_without_marker_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ProviderResult(provider="gemini", success=False, error="boom", text="boom")

    def test_success_with_error_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ProviderResult(provider="gemini", success=True, text="x", error="boom")

    def test_direct_construction_of_valid_failure(self) -> None:
        result = ProviderResult(provider="gemini", success=False, error="boom", text="Error: boom")
        assert result.error == "boom"

"""
Search service: validate the query, call the provider, wrap the result.

Responsibility: Keep routes free of provider logic. Raises InvalidQueryError for
blank queries before any outbound call is made.
"""

import logging
import time
from typing import Protocol

from app.core.errors import InvalidQueryError
from app.schemas.search import ProviderResult, SearchResponse

logger = logging.getLogger(__name__)


class Provider(Protocol):
    provider: str

    def search(self, query: str) -> ProviderResult: ...


def validate_query(query: str | None) -> str:
    """Return the query unchanged, or raise InvalidQueryError if it is missing or blank."""
    if query is None or not query.strip():
        raise InvalidQueryError()
    return query


class SearchService:
    """Wraps the wired provider. Only one provider is invoked per request."""

    def __init__(self, provider: Provider) -> None:
        self._provider = provider

    def search_all(self, query: str | None) -> SearchResponse:
        query = validate_query(query)
        logger.info("[search:search_all] IN  query=%r", query)
        result = self._provider.search(query)
        response = SearchResponse.wrap(query, [result], timestamp=int(time.time() * 1000))
        logger.info(
            "[search:search_all] OUT providers=%d success=%s", response.total_providers, result.success
        )
        return response

    def search_single(self, query: str | None) -> ProviderResult:
        query = validate_query(query)
        logger.info("[search:search_single] IN  provider=%s query=%r", self._provider.provider, query)
        return self._provider.search(query)

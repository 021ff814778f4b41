"""
API handlers: read request data, call services, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Exception-to-HTTP mapping lives
here so services stay free of FastAPI/HTTP types. Unexpected failures become a
generic 500 with no detail from the underlying exception.
"""

import logging
from typing import Callable, TypeVar

from fastapi import HTTPException, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from app.core.config import TEST_QUERY
from app.core.errors import InvalidQueryError
from app.schemas.search import ProviderResult, SearchRequest, SearchResponse
from app.services.search_service import SearchService

logger = logging.getLogger(__name__)

T = TypeVar("T")

INTERNAL_ERROR_DETAIL = "Internal server error"
INVALID_REQUEST_DETAIL = "Request body must be a JSON object with a string 'query'"

# Routes whose malformed bodies are a 400 rather than FastAPI's 422
SEARCH_PATH_PREFIX = "/api/search"


def get_search_service(request: Request) -> SearchService:
    """FastAPI dependency: the SearchService built at startup."""
    return request.app.state.search_service


async def search_validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    """Unreadable search bodies (not JSON, non-string query) are client errors: 400."""
    if not request.url.path.startswith(SEARCH_PATH_PREFIX):
        return await request_validation_exception_handler(request, exc)
    logger.warning("[api:validation] path=%s rejected: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": INVALID_REQUEST_DETAIL})


def _run(name: str, call: Callable[[], T]) -> T:
    try:
        return call()
    except InvalidQueryError as e:
        logger.warning("[api:%s] rejected: %s", name, e.message)
        raise HTTPException(status_code=400, detail=e.message) from e
    except Exception as e:
        logger.exception("[api:%s] failed", name)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_DETAIL) from e


def _query(body: SearchRequest | None) -> str | None:
    return body.query if body is not None else None


def handle_search(service: SearchService, body: SearchRequest | None) -> SearchResponse:
    return _run("search", lambda: service.search_all(_query(body)))


def handle_provider_search(service: SearchService, body: SearchRequest | None) -> ProviderResult:
    return _run("search_provider", lambda: service.search_single(_query(body)))


def handle_provider_test(service: SearchService) -> ProviderResult:
    """Run the canned query against the provider."""
    return _run("test_provider", lambda: service.search_single(TEST_QUERY))

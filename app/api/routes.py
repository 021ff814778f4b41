"""
API route aggregator: register endpoints; no logic — only delegate to handlers.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.api.handlers import (
    get_search_service,
    handle_provider_search,
    handle_provider_test,
    handle_search,
)
from app.core.config import HEALTH_MESSAGE
from app.schemas.search import ProviderResult, SearchRequest, SearchResponse
from app.services.search_service import SearchService

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/health", tags=["system"], response_class=PlainTextResponse)
def health() -> str:
    logger.info("[api:health] requested")
    return HEALTH_MESSAGE


@router.get(
    "/test-gemini",
    response_model=ProviderResult,
    tags=["system"],
    summary="Check the Gemini key and endpoint with a canned query",
)
def test_gemini(service: SearchService = Depends(get_search_service)) -> ProviderResult:
    return handle_provider_test(service)


# --- Search ---

@router.post(
    "/search",
    response_model=SearchResponse,
    tags=["search"],
    summary="Search all wired providers",
    description="Send a query; receive one result per provider in an envelope. 400 on blank query, 500 on unexpected failure. Provider errors are returned as results with success=false.",
)
def post_search(body: SearchRequest | None = None, service: SearchService = Depends(get_search_service)) -> SearchResponse:
    return handle_search(service, body)


@router.post(
    "/search/gemini",
    response_model=ProviderResult,
    tags=["search"],
    summary="Search Gemini only",
    description="Same as /search but returns the bare provider result without the envelope.",
)
def post_search_gemini(body: SearchRequest | None = None, service: SearchService = Depends(get_search_service)) -> ProviderResult:
    return handle_provider_search(service, body)

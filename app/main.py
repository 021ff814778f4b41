# Run from project root: uvicorn app.main:app --reload

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.handlers import search_validation_error_handler
from app.api.routes import router
from app.core.config import Settings, load_settings
from app.services.gemini_client import GeminiClient
from app.services.search_service import SearchService

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, http_client: httpx.Client | None = None) -> FastAPI:
    """Build the app and wire its services once. Pass http_client to control the transport (tests)."""
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level)
    owns_client = http_client is None
    client = http_client or httpx.Client(timeout=settings.gemini_timeout)

    if not settings.gemini_api_key:
        logger.warning("[main] GEMINI_API_KEY is not set; provider calls will fail")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_client:
            client.close()

    app = FastAPI(title="AI Search Backend", lifespan=lifespan)
    app.state.settings = settings
    app.state.search_service = SearchService(GeminiClient(settings, client))

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_exception_handler(RequestValidationError, search_validation_error_handler)
    app.include_router(router, prefix="/api")
    logger.info("[main] ready model=%s url=%s", settings.gemini_model, settings.gemini_api_url)
    return app


app = create_app()

"""
Shared fixtures: app wired to a fake Gemini upstream via httpx.MockTransport.
"""

from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app

GEMINI_OK_BODY = {"candidates": [{"content": {"parts": [{"text": "AI is..."}]}}]}


class FakeUpstream:
    """Records outbound requests and answers with a configurable handler."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.respond: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json=GEMINI_OK_BODY
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        gemini_api_key="test-key",
        gemini_api_url="https://gemini.test/v1beta/models",
        gemini_model="gemini-test",
        cors_origins=["http://localhost:3000"],
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def http_client(upstream: FakeUpstream) -> httpx.Client:
    with httpx.Client(transport=httpx.MockTransport(upstream)) as client:
        yield client


@pytest.fixture
def client(settings: Settings, http_client: httpx.Client) -> TestClient:
    return TestClient(create_app(settings=settings, http_client=http_client))

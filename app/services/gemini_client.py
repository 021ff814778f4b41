"""
Gemini provider client: build the generateContent payload, POST it, and map the
JSON answer (or any failure) into a ProviderResult.

Responsibility: the only outbound call. search() never raises; every failure is
returned as ProviderResult(success=False).
"""

import logging
import time
from typing import Any

import httpx

from app.core.config import (
    GEN_MAX_OUTPUT_TOKENS,
    GEN_TEMPERATURE,
    GEN_TOP_K,
    GEN_TOP_P,
    PROMPT_PREFIX,
    PROVIDER_NAME,
    Settings,
)
from app.schemas.search import ProviderResult

logger = logging.getLogger(__name__)

UNEXPECTED_STRUCTURE = "unexpected response structure"


def build_payload(query: str) -> dict[str, Any]:
    """Request body in the shape Gemini generateContent expects."""
    return {
        "contents": [{"parts": [{"text": f"{PROMPT_PREFIX}{query}"}]}],
        "generationConfig": {
            "temperature": GEN_TEMPERATURE,
            "topK": GEN_TOP_K,
            "topP": GEN_TOP_P,
            "maxOutputTokens": GEN_MAX_OUTPUT_TOKENS,
        },
    }


def extract_text(data: Any) -> str | None:
    """Return candidates[0].content.parts[0].text, or None if any node is missing."""
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    if not isinstance(text, str):
        return None
    return text


def _elapsed_ms(start: float) -> int:
    return max(0, int((time.perf_counter() - start) * 1000))


class GeminiClient:
    """Single-provider client. Constructed once at startup with settings and an HTTP client."""

    provider = PROVIDER_NAME

    def __init__(self, settings: Settings, http_client: httpx.Client) -> None:
        self._settings = settings
        self._http = http_client

    def search(self, query: str) -> ProviderResult:
        """Ask Gemini one question. Always returns a ProviderResult with responseTimeMs set."""
        start = time.perf_counter()
        logger.info("[gemini:search] IN  query_len=%d model=%s", len(query or ""), self._settings.gemini_model)
        try:
            response = self._http.post(
                self._settings.generate_url,
                params={"key": self._settings.gemini_api_key},
                json=build_payload(query),
            )
        except Exception as e:
            message = str(e) or e.__class__.__name__
            logger.warning("[gemini:search] request failed: %s", message)
            return ProviderResult.failed(self.provider, message, _elapsed_ms(start))

        if response.status_code != 200:
            logger.warning("[gemini:search] Gemini error %s: %s", response.status_code, response.text[:200])
            return ProviderResult.failed(
                self.provider, f"API returned status: {response.status_code}", _elapsed_ms(start)
            )

        return self._parse(response, start)

    def _parse(self, response: httpx.Response, start: float) -> ProviderResult:
        try:
            data = response.json()
        except ValueError as e:
            logger.warning("[gemini:parse] invalid JSON body: %s", e)
            return ProviderResult.failed(self.provider, f"Error parsing response: {e}", _elapsed_ms(start))

        text = extract_text(data)
        if text is None:
            logger.warning("[gemini:parse] %s: %s", UNEXPECTED_STRUCTURE, response.text[:200])
            return ProviderResult.failed(self.provider, UNEXPECTED_STRUCTURE, _elapsed_ms(start))

        elapsed = _elapsed_ms(start)
        logger.info("[gemini:search] OUT success text_len=%d response_time_ms=%d", len(text), elapsed)
        return ProviderResult.ok(self.provider, text, elapsed)

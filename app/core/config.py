"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Deployment values are read once into a Settings object at startup and
passed down; fixed generation parameters stay module-level constants.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Provider identity (single provider wired)
PROVIDER_NAME: str = "gemini"

# Gemini defaults
DEFAULT_GEMINI_API_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_GEMINI_MODEL: str = "gemini-1.5-flash-latest"

# Generation parameters sent with every request (constant, not tuned per query)
GEN_TEMPERATURE: float = 0.7
GEN_TOP_K: int = 40
GEN_TOP_P: float = 0.95
GEN_MAX_OUTPUT_TOKENS: int = 1024

PROMPT_PREFIX: str = "Please provide a comprehensive answer to: "

# Error marker prepended to ProviderResult.text on failure
ERROR_MARKER: str = "Error: "

# API timeout (seconds)
GEMINI_API_TIMEOUT: float = 60.0

# System endpoints
HEALTH_MESSAGE: str = "AI search backend is running"
TEST_QUERY: str = "Say 'Hello from Gemini!'"

# Frontend dev server
DEFAULT_CORS_ORIGINS: str = "http://localhost:3000"


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Values that differ per deployment. Built once by load_settings()."""

    gemini_api_key: str = ""
    gemini_api_url: str = DEFAULT_GEMINI_API_URL
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_timeout: float = GEMINI_API_TIMEOUT
    cors_origins: list[str] = field(default_factory=lambda: _split_csv(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"

    @property
    def generate_url(self) -> str:
        """Full generateContent URL without the key query parameter."""
        return f"{self.gemini_api_url.rstrip('/')}/{self.gemini_model}:generateContent"


def _timeout_from_env() -> float:
    raw = os.getenv("GEMINI_TIMEOUT", "").strip()
    if not raw:
        return GEMINI_API_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if value <= 0:
        logger.warning("[config] invalid GEMINI_TIMEOUT=%r; using %.1f", raw, GEMINI_API_TIMEOUT)
        return GEMINI_API_TIMEOUT
    return value


def _log_level_from_env() -> str:
    raw = os.getenv("LOG_LEVEL", "").strip().upper()
    if not raw:
        return "INFO"
    if not isinstance(logging.getLevelName(raw), int):
        logger.warning("[config] invalid LOG_LEVEL=%r; using INFO", raw)
        return "INFO"
    return raw


def load_settings() -> Settings:
    """Read Settings from the environment (after .env has been loaded). Bad numeric/level values fall back to defaults."""
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
        gemini_api_url=os.getenv("GEMINI_API_URL", "").strip() or DEFAULT_GEMINI_API_URL,
        gemini_model=os.getenv("GEMINI_MODEL", "").strip() or DEFAULT_GEMINI_MODEL,
        gemini_timeout=_timeout_from_env(),
        cors_origins=_split_csv(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)),
        log_level=_log_level_from_env(),
    )

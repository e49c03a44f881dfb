"""
infrastructure.config - Typed, injectable configuration.

A frozen dataclass constructed once at process start from the environment
(and an optional .env file), then passed explicitly into the factory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

AGENT_MODES = ("interactive", "demo", "batch")

# Checked in this order; the CLI lists them by name when absent.
REQUIRED_ENV_VARS = (
    ("OPENAI_API_KEY", "openai_api_key"),
    ("SUPABASE_URL", "supabase_url"),
    ("SUPABASE_KEY", "supabase_key"),
    ("LANGSMITH_API_KEY", "langsmith_api_key"),
)

_FALSY = ("0", "false", "no", "off")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in _FALSY


def _env_number(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Centralized configuration for the knowledge agent.

    Credentials default to empty strings so that a partially configured
    environment can still be inspected with missing_required().
    """

    # Credentials / endpoints
    openai_api_key: str = ""
    supabase_url: str = ""
    supabase_key: str = ""
    langsmith_api_key: str = ""

    # Tracing
    langsmith_project: str = "knowledge-agent"
    tracing_enabled: bool = True

    # CLI
    agent_mode: str = "interactive"

    # Agent
    model_name: str = "gpt-4"
    temperature: float = 0.7
    max_tokens: int = 2000
    max_iterations: int = 5
    verbose: bool = True

    # Embeddings (must match the vector(1536) column in document_chunks)
    embedding_model: str = "text-embedding-ada-002"

    log_level: str = "WARNING"

    def missing_required(self) -> list[str]:
        """Return the names of required environment variables that are unset."""
        return [env for env, attr in REQUIRED_ENV_VARS if not getattr(self, attr)]

    @classmethod
    def from_env(cls) -> Settings:
        """Build Settings from the process environment (after loading .env).

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        load_dotenv()

        mode = os.getenv("AGENT_MODE", "interactive").strip().lower() or "interactive"
        if mode not in AGENT_MODES:
            logger.warning(
                "Unknown AGENT_MODE '%s', falling back to interactive", mode,
            )
            mode = "interactive"

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            supabase_url=os.getenv("SUPABASE_URL", ""),
            supabase_key=os.getenv("SUPABASE_KEY", ""),
            langsmith_api_key=os.getenv("LANGSMITH_API_KEY", ""),
            langsmith_project=os.getenv("LANGSMITH_PROJECT", "knowledge-agent"),
            tracing_enabled=_env_bool("LANGSMITH_TRACING", True),
            agent_mode=mode,
            model_name=os.getenv("AGENT_MODEL", "gpt-4"),
            temperature=_env_number("AGENT_TEMPERATURE", "0.7", float),
            max_tokens=_env_number("AGENT_MAX_TOKENS", "2000", int),
            max_iterations=_env_number("AGENT_MAX_ITERATIONS", "5", int),
            verbose=_env_bool("AGENT_VERBOSE", True),
            embedding_model=os.getenv("EMBEDDING_MODEL", "text-embedding-ada-002"),
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        )

"""
domain.models - Value objects for agent configuration and turn results.

Immutable data containers with no dependencies on infrastructure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from knowledge_agent.infrastructure.config import Settings


FALLBACK_OUTPUT = (
    "I encountered an error processing your request. "
    "Please try again or rephrase your question."
)


@dataclass(frozen=True)
class AgentConfig:
    """Model and loop settings supplied once at agent construction time."""
    model_name: str = "gpt-4"
    temperature: float = 0.7
    max_tokens: int = 2000
    verbose: bool = True
    max_iterations: int = 5

    def __post_init__(self) -> None:
        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError(
                f"temperature must be between 0.0 and 2.0, got {self.temperature}"
            )
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be positive, got {self.max_iterations}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> AgentConfig:
        return cls(
            model_name=settings.model_name,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            verbose=settings.verbose,
            max_iterations=settings.max_iterations,
        )


@dataclass(frozen=True)
class ExecutionResult:
    """Uniform success/failure/timing envelope returned for every turn.

    output:        Agent answer on success, the fixed fallback text on failure.
    error:         Internal error string, only set on failure.
    duration_ms:   Wall-clock time of the turn in milliseconds.
    raw_metadata:  Pass-through of the underlying invocation result.
    """
    success: bool
    output: str
    duration_ms: int = 0
    error: Optional[str] = None
    raw_metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, output: str, duration_ms: int, raw: dict[str, Any] | None = None) -> ExecutionResult:
        return cls(
            success=True,
            output=output,
            duration_ms=max(0, duration_ms),
            raw_metadata=dict(raw or {}),
        )

    @classmethod
    def failed(cls, error: str, duration_ms: int) -> ExecutionResult:
        return cls(
            success=False,
            output=FALLBACK_OUTPUT,
            duration_ms=max(0, duration_ms),
            error=error,
        )

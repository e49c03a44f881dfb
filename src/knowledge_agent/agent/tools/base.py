"""
agent.tools.base - Base tool interface and result container.

All agent tools inherit from BaseTool and return ToolResult. Tools never
raise: validation problems and handler failures come back as text, since
the model only ever sees tool output as a plain string.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from knowledge_agent.domain.exceptions import ToolExecutionError

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """Result returned by a tool execution.

    output:  String shown to the model.
    data:    Structured payload for callers and tests (not passed through the LLM).
    error:   Set when the handler raised; its message is the output.
    """
    output: str
    data: Any = None
    error: Optional[ToolExecutionError] = None


def format_validation_error(tool_name: str, error: ValidationError) -> str:
    """Render a pydantic ValidationError as a one-line message for the model."""
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
        for err in error.errors()
    )
    return f"Error: invalid arguments for {tool_name}: {details}"


class BaseTool(ABC):
    """Abstract base for all agent tools."""

    name: str
    description: str
    # Prefix for the text returned when the handler raises.
    error_prefix: str = "Error"

    @abstractmethod
    async def execute(self, **kwargs) -> ToolResult:
        """Execute the tool with validated arguments."""
        ...

    @abstractmethod
    def get_schema(self) -> type[BaseModel]:
        """Return the Pydantic schema for this tool's input arguments."""
        ...

    def validate(self, args: Optional[dict[str, Any]]) -> BaseModel:
        """Validate raw arguments against the schema (raises ValidationError)."""
        return self.get_schema().model_validate(args or {})

    async def run(self, args: Optional[dict[str, Any]] = None) -> ToolResult:
        """Validate, execute, and convert any failure into a text result."""
        try:
            parsed = self.validate(args)
        except ValidationError as exc:
            logger.warning("Tool '%s' rejected arguments: %s", self.name, exc)
            return ToolResult(output=format_validation_error(self.name, exc))

        try:
            return await self.execute(**parsed.model_dump())
        except Exception as exc:
            error = ToolExecutionError(self.name, f"{self.error_prefix}: {exc or type(exc).__name__}")
            error.__cause__ = exc
            logger.warning("Tool '%s' failed: %s", self.name, exc, exc_info=True)
            return ToolResult(output=str(error), error=error)

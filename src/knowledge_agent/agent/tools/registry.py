"""
agent.tools.registry - Tool registration, discovery, and invocation.

Central lookup table keyed by tool name. Dispatch is a dictionary lookup;
the registry also produces the LangChain StructuredTool wrappers handed
to the agent executor.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from langchain_core.tools import StructuredTool
from pydantic import ValidationError

from knowledge_agent.agent.tools.base import BaseTool, format_validation_error

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Manages tool registration and invocation."""

    def __init__(self, tools: Optional[list[BaseTool]] = None):
        self._tools: dict[str, BaseTool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: BaseTool) -> None:
        """Register a tool by its name (names must be unique)."""
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' already registered")
        self._tools[tool.name] = tool
        logger.debug("Registered tool: %s", tool.name)

    def get(self, name: str) -> BaseTool:
        """Get a tool by name."""
        if name not in self._tools:
            raise KeyError(f"Tool '{name}' not registered")
        return self._tools[name]

    def all(self) -> list[BaseTool]:
        """Return all registered tools."""
        return list(self._tools.values())

    def names(self) -> list[str]:
        """Return all registered tool names."""
        return list(self._tools.keys())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    async def invoke(self, name: str, args: Optional[dict[str, Any]] = None) -> str:
        """Invoke a tool by name and return its string output."""
        if name not in self._tools:
            return f"Error: unknown tool '{name}'. Available tools: {', '.join(self.names())}"
        result = await self._tools[name].run(args)
        return result.output

    def to_langchain_tools(self) -> list[StructuredTool]:
        """Convert all registered tools to LangChain StructuredTools."""
        lc_tools = []
        for tool in self._tools.values():

            # Closure per tool so each wrapper dispatches to its own instance.
            def _make_coroutine(t: BaseTool):
                async def coroutine(**kwargs: Any) -> str:
                    result = await t.run(kwargs)
                    return result.output
                return coroutine

            def _make_error_handler(t: BaseTool):
                def handle(error: ValidationError) -> str:
                    return format_validation_error(t.name, error)
                return handle

            lc_tools.append(StructuredTool.from_function(
                coroutine=_make_coroutine(tool),
                name=tool.name,
                description=tool.description,
                args_schema=tool.get_schema(),
                handle_validation_error=_make_error_handler(tool),
            ))
        return lc_tools

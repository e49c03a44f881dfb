"""
agent.prompt - System prompt for the knowledge agent.

The prompt lists the registered tools and stamps the construction time;
it is built once per agent and not refreshed between turns.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from knowledge_agent.agent.tools.datetime_tool import to_iso, utc_now
from knowledge_agent.agent.tools.registry import ToolRegistry


def build_system_prompt(registry: ToolRegistry, now: Optional[datetime] = None) -> str:
    """Build the system prompt with the registered tool descriptions.

    Args:
        registry: The tool registry with all registered tools.
        now:      Construction timestamp (defaults to the current UTC time).
    """
    tool_lines = "\n".join(
        f"- {tool.name}: {tool.description}" for tool in registry.all()
    )
    timestamp = to_iso(now or utc_now())

    return f"""You are a professional AI assistant powered by advanced language models and equipped with specialized tools.

AVAILABLE TOOLS:
{tool_lines}

GUIDELINES:
- Use document_search for questions about company documents or the knowledge base
- Use database_query only for structured lookups in the allowed tables
- Use data_analysis for any arithmetic or statistics instead of computing in your head
- Use datetime whenever the answer depends on today's date
- Use conversation_memory only when the user asks to save or recall a conversation
- If a tool returns an error or no results, say so plainly and never invent data
- Answer directly, without tools, when no tool is needed

Current datetime: {timestamp}"""

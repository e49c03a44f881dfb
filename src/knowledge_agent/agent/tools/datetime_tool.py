"""
agent.tools.datetime_tool - Current date/time and day arithmetic.

All timestamps are UTC and rendered as ISO-8601 with millisecond
precision and a trailing 'Z'.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Literal, Optional

from pydantic import BaseModel, Field

from knowledge_agent.agent.tools.base import BaseTool, ToolResult

INVALID_REQUEST = "Error: Invalid action or missing parameters."


class DateTimeInput(BaseModel):
    """Input schema for the datetime tool."""

    action: Literal["current", "add_days", "format"] = Field(
        description="Action to perform",
    )
    days: Optional[int] = Field(
        default=None,
        description="Number of days to add (for add_days); negative values go back",
    )
    format: Optional[str] = Field(
        default=None,
        description="Required for the format action; the result always uses the locale default form",
    )


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """Render a UTC instant as e.g. 2024-05-01T12:30:00.000Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def shift_days(moment: datetime, days: int) -> datetime:
    return moment + timedelta(days=days)


class DateTimeTool(BaseTool):
    """Report the current instant or shift it by whole days."""

    name = "datetime"
    description = "Get current date and time, or perform date calculations."
    error_prefix = "Error with datetime"

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    def get_schema(self) -> type[BaseModel]:
        return DateTimeInput

    async def execute(
        self,
        action: str,
        days: Optional[int] = None,
        format: Optional[str] = None,
        **kwargs,
    ) -> ToolResult:
        now = self._clock()

        if action == "current":
            return ToolResult(output=f"Current date and time: {to_iso(now)}", data=now)

        if action == "add_days" and days is not None:
            shifted = shift_days(now, days)
            return ToolResult(output=f"Date after {days} days: {to_iso(shifted)}", data=shifted)

        if action == "format" and format:
            # Only the presence of the argument matters, not its content.
            return ToolResult(output=f"Formatted date: {now.strftime('%x %X')}", data=now)

        return ToolResult(output=INVALID_REQUEST)

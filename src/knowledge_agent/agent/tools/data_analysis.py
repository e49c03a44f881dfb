"""
agent.tools.data_analysis - Basic descriptive statistics.
"""

from __future__ import annotations

from typing import Literal, Sequence

from pydantic import BaseModel, Field

from knowledge_agent.agent.tools.base import BaseTool, ToolResult

Operation = Literal["mean", "median", "sum", "count", "min", "max"]


class DataAnalysisInput(BaseModel):
    """Input schema for the data_analysis tool."""

    operation: Operation = Field(description="The operation to perform")
    values: list[float] = Field(description="Array of numbers to analyze")


def median(values: Sequence[float]) -> float:
    """Middle element of the sorted copy, or the mean of the two middle ones."""
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def analyze(operation: str, values: Sequence[float]) -> float:
    """Apply one reduction to a non-empty sequence of numbers."""
    if not values:
        raise ValueError("No values provided for analysis.")

    if operation == "mean":
        return sum(values) / len(values)
    if operation == "median":
        return median(values)
    if operation == "sum":
        return sum(values)
    if operation == "count":
        return len(values)
    if operation == "min":
        return min(values)
    if operation == "max":
        return max(values)
    raise ValueError(f"Invalid operation: {operation}")


class DataAnalysisTool(BaseTool):
    """Compute a statistic over a list of numbers."""

    name = "data_analysis"
    description = (
        "Perform statistical analysis on data: calculate mean, median, sum, "
        "count, min or max of a list of numbers."
    )
    error_prefix = "Error performing analysis"

    def get_schema(self) -> type[BaseModel]:
        return DataAnalysisInput

    async def execute(self, operation: str, values: list[float], **kwargs) -> ToolResult:
        if not values:
            return ToolResult(output="Error: No values provided for analysis.")

        result = analyze(operation, values)
        return ToolResult(output=f"{operation.upper()}: {result:.2f}", data=result)

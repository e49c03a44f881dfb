"""
application.runner - Execution wrapper and batch runner.

run_once() is the only place turn failures are caught: whatever the
executor raises becomes a failed ExecutionResult, so neither the
interactive loop nor a batch run can be brought down by one query.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional, Protocol, Sequence

from knowledge_agent.domain.models import ExecutionResult

logger = logging.getLogger(__name__)


class TurnExecutor(Protocol):
    async def invoke(
        self, user_input: str, metadata: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]: ...


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


async def run_once(
    executor: TurnExecutor,
    user_input: str,
    metadata: Optional[dict[str, Any]] = None,
) -> ExecutionResult:
    """Run a single turn and wrap the outcome in an ExecutionResult."""
    start = time.perf_counter()
    try:
        response = await executor.invoke(user_input, metadata)
    except Exception as exc:
        duration = _elapsed_ms(start)
        logger.exception("Agent turn failed after %d ms", duration)
        return ExecutionResult.failed(str(exc) or type(exc).__name__, duration)

    duration = _elapsed_ms(start)
    logger.info("Response generated in %d ms", duration)
    output = response.get("output", "")
    return ExecutionResult.ok(
        output if isinstance(output, str) else str(output),
        duration,
        response,
    )


async def run_batch(
    executor: TurnExecutor,
    queries: Sequence[str],
    on_result: Optional[Callable[[int, str, ExecutionResult], None]] = None,
) -> list[ExecutionResult]:
    """Run queries one after another, in order, collecting every result.

    Args:
        executor:  The agent to run each query against.
        queries:   Inputs, processed strictly sequentially.
        on_result: Optional callback invoked as (index, query, result)
                   after each query completes.
    """
    logger.info("Batch processing %d queries", len(queries))
    results: list[ExecutionResult] = []
    for index, query in enumerate(queries):
        result = await run_once(executor, query)
        results.append(result)
        if on_result is not None:
            on_result(index, query, result)

    failed = sum(1 for r in results if not r.success)
    logger.info("Batch complete: %d succeeded, %d failed", len(results) - failed, failed)
    return results

"""
adapters.cli.main - CLI adapter for the knowledge agent.

No flags: behaviour is selected entirely by configuration.

Modes (AGENT_MODE)
------------------
  interactive  Chat in the terminal; 'help' lists tools, 'exit'/'quit' stop (default)
  demo         Run three fixed example queries with a short pause between them
  batch        Run three fixed queries through the batch runner and summarise

Usage
-----
  knowledge-agent
  AGENT_MODE=demo python -m knowledge_agent
"""

from __future__ import annotations

import asyncio
from typing import Any

import typer
from rich import box
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt
from rich.console import Console
from rich.table import Table

from knowledge_agent import __version__
from knowledge_agent.application.runner import run_batch, run_once
from knowledge_agent.domain.exceptions import ConfigurationError
from knowledge_agent.domain.models import ExecutionResult
from knowledge_agent.factory import ServiceFactory
from knowledge_agent.infrastructure.config import Settings
from knowledge_agent.infrastructure.logging_config import setup_logging
from knowledge_agent.infrastructure.tracing import configure_tracing

console = Console()
app = typer.Typer(
    help="Knowledge Agent CLI",
    add_completion=False,
)

EXIT_COMMANDS = ("exit", "quit")
HELP_COMMAND = "help"
DEMO_PAUSE_SECONDS = 1.0

DEMO_QUERIES = [
    "What is the current date and time?",
    "Calculate the mean of these numbers: 10, 20, 30, 40, 50",
    'Search for documents about "AI and machine learning"',
]

BATCH_QUERIES = [
    "What tools do you have available?",
    "Calculate the sum of 100, 200, and 300",
    "Get the current datetime",
]

TOOL_SUMMARIES = {
    "document_search": "Find information in documents",
    "database_query": "Query structured data",
    "data_analysis": "Calculate statistics",
    "conversation_memory": "Remember chat history",
    "datetime": "Get current time and date info",
}


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _print_missing(missing: list[str]) -> None:
    console.print("\n[bold red]Missing required environment variables:[/bold red]")
    for name in missing:
        console.print(f"   - {name}")
    console.print(
        "\nPlease check your .env file and add the missing keys "
        "(see .env.example).\n"
    )


def _print_fatal(exc: Exception) -> None:
    console.print(f"\n[bold red]Fatal error:[/bold red] {exc}")
    console.print("Please check your configuration and try again.\n")


def _print_result(result: ExecutionResult) -> None:
    if result.success:
        console.print(Panel(Markdown(result.output), title="Agent", border_style="green"))
        console.print(f"[dim]Duration: {result.duration_ms} ms[/dim]")
    else:
        console.print(Panel(result.output, title="Agent", border_style="red"))
        console.print(f"[bold red]Error:[/bold red] {result.error}")


def _print_tools(agent: Any) -> None:
    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column("#", style="bold")
    table.add_column("Tool", style="bold cyan")
    table.add_column("Purpose")
    for idx, name in enumerate(agent.tools.names(), start=1):
        table.add_row(str(idx), name, TOOL_SUMMARIES.get(name, ""))
    console.print(Panel(table, title="Available Tools", border_style="blue"))


async def _run_turn(agent: Any, query: str) -> ExecutionResult:
    with console.status("[bold cyan]Thinking…", spinner="dots"):
        return await run_once(agent, query)


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------

async def run_interactive_mode(agent: Any) -> None:
    """Read-eval-print loop; one turn completes before the next prompt."""
    console.print(Panel(
        "[bold]Interactive Mode[/bold] - chat with your AI agent\n"
        "Type your question and press Enter.\n"
        "Type [bold]help[/bold] to see available tools, "
        "[bold]exit[/bold] / [bold]quit[/bold] to stop.",
        border_style="cyan",
    ))

    while True:
        try:
            user_input = Prompt.ask("\n[bold cyan]You[/bold cyan]", console=console)
        except (KeyboardInterrupt, EOFError):
            console.print("\n[dim]Goodbye![/dim]")
            break

        query = user_input.strip()
        if not query:
            continue

        command = query.lower()
        if command in EXIT_COMMANDS:
            console.print("\n[dim]Goodbye! Thanks for using the agent.[/dim]")
            break

        if command == HELP_COMMAND:
            _print_tools(agent)
            continue

        result = await _run_turn(agent, query)
        _print_result(result)


async def run_demo_mode(agent: Any) -> list[ExecutionResult]:
    """Run the fixed demo script, pausing between queries."""
    console.print(Panel("[bold]Demo Mode[/bold]", border_style="magenta"))

    results = []
    for idx, query in enumerate(DEMO_QUERIES):
        console.print(f"\n[bold]Query {idx + 1}/{len(DEMO_QUERIES)}:[/bold] {query}")
        result = await _run_turn(agent, query)
        _print_result(result)
        results.append(result)
        if idx < len(DEMO_QUERIES) - 1:
            await asyncio.sleep(DEMO_PAUSE_SECONDS)

    console.print("\n[bold green]Demo completed![/bold green]\n")
    return results


async def run_batch_mode(agent: Any) -> list[ExecutionResult]:
    """Run the fixed batch script and print a summary table."""
    console.print(Panel(
        f"[bold]Batch Mode[/bold] - {len(BATCH_QUERIES)} queries",
        border_style="magenta",
    ))

    def _progress(index: int, query: str, result: ExecutionResult) -> None:
        status = "[green]done[/green]" if result.success else "[red]failed[/red]"
        console.print(f"[{index + 1}/{len(BATCH_QUERIES)}] {query} … {status}")

    with console.status("[bold cyan]Processing batch…", spinner="dots"):
        results = await run_batch(agent, BATCH_QUERIES, on_result=_progress)

    table = Table(title="Batch Results Summary", box=box.SIMPLE_HEAVY)
    table.add_column("#", style="bold")
    table.add_column("Query")
    table.add_column("Status")
    table.add_column("Duration", justify="right")
    for idx, (query, result) in enumerate(zip(BATCH_QUERIES, results), start=1):
        table.add_row(
            str(idx),
            query,
            "[green]Success[/green]" if result.success else "[red]Failed[/red]",
            f"{result.duration_ms} ms" if result.success else "-",
        )
    console.print(table)
    return results


_MODES = {
    "interactive": run_interactive_mode,
    "demo": run_demo_mode,
    "batch": run_batch_mode,
}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

@app.command()
def main() -> None:
    """Start the knowledge agent in the mode chosen by AGENT_MODE."""
    # Default handler first so warnings raised while reading the environment are formatted.
    setup_logging()
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        _print_fatal(exc)
        raise typer.Exit(code=1)
    setup_logging(settings.log_level)

    console.print(Panel(
        f"[bold]Knowledge Agent[/bold] v{__version__}",
        border_style="cyan",
    ))

    missing = settings.missing_required()
    if missing:
        _print_missing(missing)
        raise typer.Exit(code=1)

    tracing = configure_tracing(settings)
    console.print("[green]Environment variables loaded[/green]")
    console.print(
        f"[green]LangSmith tracing {'enabled' if tracing else 'disabled'}[/green] "
        f"(project: {settings.langsmith_project})"
    )

    try:
        with console.status("[bold cyan]Initializing AI agent…", spinner="dots"):
            agent = ServiceFactory(settings).create_agent()
    except ConfigurationError as exc:
        _print_missing(exc.missing)
        raise typer.Exit(code=1)
    except Exception as exc:
        _print_fatal(exc)
        raise typer.Exit(code=1)
    console.print("[green]Agent initialized successfully![/green]")

    asyncio.run(_MODES[settings.agent_mode](agent))


if __name__ == "__main__":
    app()

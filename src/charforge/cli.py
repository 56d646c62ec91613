"""CharForge CLI - typer application entry point."""

from __future__ import annotations

import asyncio
import atexit
import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from charforge.config import ConfigError, load_harness_config
from charforge.harness.aggregate import aggregate_results
from charforge.harness.backend import BackendClient
from charforge.harness.cases import (
    SAMPLE_CONCEPTS,
    CaseFilters,
    generate_filtered_sample,
    generate_pilot_test_cases,
    generate_representative_sample,
)
from charforge.harness.fixtures import get_mock_constraints
from charforge.harness.report import format_summary_report
from charforge.harness.runner import RunOptions, run_batch
from charforge.models.generation import GenerationInput
from charforge.observability import close_file_logging, configure_logging, get_logger
from charforge.prompts.builder import SYSTEM_PROMPT, build_preference_prompt

if TYPE_CHECKING:
    from charforge.models.harness import EvalCase, EvalResult

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="charforge",
    help="CharForge: LLM character preference generation and translation harness.",
    no_args_is_help=True,
)
console = Console()

ClassOption = Annotated[
    list[str] | None, typer.Option("--class", "-c", help="Restrict to these classes.")
]
RaceOption = Annotated[list[str] | None, typer.Option("--race", "-r", help="Restrict to these races.")]
LevelOption = Annotated[
    list[int] | None, typer.Option("--level", "-l", help="Restrict to these levels.")
]
BackgroundOption = Annotated[
    list[str] | None, typer.Option("--background", "-b", help="Restrict to these backgrounds.")
]


@app.callback()
def main(
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity: -v for INFO, -vv for DEBUG.",
        ),
    ] = 0,
    log_dir: Annotated[
        Path | None,
        typer.Option(
            "--log-dir",
            help="Also write debug logs to {dir}/logs/debug.jsonl.",
        ),
    ] = None,
) -> None:
    """CharForge: LLM character preference generation and translation harness."""
    configure_logging(verbosity=verbose, log_dir=log_dir)
    if log_dir is not None:
        atexit.register(close_file_logging)


@app.command()
def version() -> None:
    """Show version information."""
    from charforge import __version__

    console.print(f"CharForge v{__version__}")


@app.command()
def prompt(
    class_id: Annotated[
        str, typer.Option("--class", "-c", help="Class whose mock constraints to use.")
    ] = "fighter",
) -> None:
    """Show the system and user prompts sent for a level-1 human soldier."""
    constraints = get_mock_constraints(class_id)
    generation_input = GenerationInput(
        class_id=class_id,
        race_id="human",
        level=1,
        background_id="soldier",
        concept=SAMPLE_CONCEPTS[0],
    )

    console.rule("[bold]System prompt")
    console.print(SYSTEM_PROMPT, markup=False, highlight=False)
    console.rule("[bold]User prompt")
    console.print(build_preference_prompt(generation_input, constraints), markup=False, highlight=False)


def _has_filters(filters: CaseFilters) -> bool:
    return any(
        value is not None
        for value in (filters.classes, filters.races, filters.levels, filters.backgrounds)
    )


def _select_cases(
    count: int | None,
    filters: CaseFilters,
    *,
    pilot: bool = False,
) -> list[EvalCase]:
    if pilot:
        return generate_pilot_test_cases()
    if _has_filters(filters):
        return generate_filtered_sample(filters, count)
    return generate_representative_sample(count or 15)


def _filters(
    classes: list[str] | None,
    races: list[str] | None,
    levels: list[int] | None,
    backgrounds: list[str] | None,
) -> CaseFilters:
    # typer passes empty lists for unset multi-value options
    return CaseFilters(
        classes=classes or None,
        races=races or None,
        levels=levels or None,
        backgrounds=backgrounds or None,
    )


@app.command()
def cases(
    count: Annotated[
        int | None, typer.Option("--count", "-n", help="Number of cases (evenly spaced).")
    ] = None,
    classes: ClassOption = None,
    races: RaceOption = None,
    levels: LevelOption = None,
    backgrounds: BackgroundOption = None,
) -> None:
    """List the evaluation cases a run would use."""
    selected = _select_cases(count, _filters(classes, races, levels, backgrounds))

    table = Table(title=f"{len(selected)} test cases")
    table.add_column("ID", style="cyan")
    table.add_column("Class")
    table.add_column("Race")
    table.add_column("Level", justify="right")
    table.add_column("Background")
    table.add_column("Concept", style="dim")
    for case in selected:
        data = case.input
        concept = data.concept if len(data.concept) <= 50 else data.concept[:50] + "..."
        table.add_row(
            case.id, data.class_id, data.race_id, str(data.level), data.background_id, concept
        )
    console.print(table)


@app.command()
def run(
    pilot: Annotated[bool, typer.Option("--pilot", help="Run one case per class.")] = False,
    count: Annotated[
        int | None, typer.Option("--count", "-n", help="Number of cases (evenly spaced).")
    ] = None,
    classes: ClassOption = None,
    races: RaceOption = None,
    levels: LevelOption = None,
    backgrounds: BackgroundOption = None,
    live: Annotated[
        bool, typer.Option("--live", help="Use the backend instead of mock fixtures.")
    ] = False,
    concurrency: Annotated[
        int | None, typer.Option("--concurrency", help="Concurrent cases (live runs).")
    ] = None,
    retries: Annotated[
        int | None, typer.Option("--retries", help="Extra generation attempts per case.")
    ] = None,
    backend_validate: Annotated[
        bool | None,
        typer.Option("--backend-validate/--no-backend-validate", help="Validate on the backend."),
    ] = None,
    backend_compute: Annotated[
        bool | None,
        typer.Option("--backend-compute/--no-backend-compute", help="Compute stats on the backend."),
    ] = None,
    config_path: Annotated[
        Path | None, typer.Option("--config", help="Path to a charforge.yaml file.")
    ] = None,
    json_path: Annotated[
        Path | None, typer.Option("--json", help="Write the summary as JSON to this file.")
    ] = None,
) -> None:
    """Run evaluation cases and print the summary report."""
    log = get_logger(__name__)

    try:
        config = load_harness_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    options = RunOptions(
        live=live,
        max_retries=max(0, retries if retries is not None else config.max_retries),
        backend_validate=(
            backend_validate if backend_validate is not None else config.backend_validate
        ),
        backend_compute=backend_compute if backend_compute is not None else config.backend_compute,
        concurrency=max(1, concurrency if concurrency is not None else config.concurrency),
    )

    selected = _select_cases(count, _filters(classes, races, levels, backgrounds), pilot=pilot)
    log.info("run_started", cases=len(selected), live=live, concurrency=options.concurrency)
    console.print(
        f"Running [bold]{len(selected)}[/bold] cases "
        f"({'live at ' + config.api_url if live else 'mock'})"
    )

    async def _execute() -> list[EvalResult]:
        if live:
            async with BackendClient(config.api_url) as client:
                return await run_batch(selected, options, client)
        return await run_batch(selected, options)

    results = asyncio.run(_execute())
    summary = aggregate_results(results)

    console.print(format_summary_report(summary), markup=False, highlight=False)

    if json_path is not None:
        json_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "summary": summary.model_dump(mode="json", by_alias=True),
            "results": [r.model_dump(mode="json", by_alias=True) for r in results],
        }
        json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        console.print(f"Summary written to [cyan]{json_path}[/cyan]")

    if not any(r.overall_success for r in results):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()

"""
CLI interface for Claude Token Tracker.

Provides command-line access to the usage summaries.
"""

import logging
import os
import sys
from dataclasses import dataclass, replace
from typing import List, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from claude_token_tracker.cli.status import StatusIndicator
from claude_token_tracker.config.loader import TrackerConfig, load_tracker_config
from claude_token_tracker.core.aggregator import aggregate_by_model, sum_usage
from claude_token_tracker.core.metrics import (
    DisplayUnit,
    calculate_energy,
    calculate_trees_burned,
    format_usage,
    get_model_display_name,
    get_unit_label,
)
from claude_token_tracker.core.pricing import PricingTable, calculate_model_cost
from claude_token_tracker.core.token_counter import TokenUsage
from claude_token_tracker.storage.models import ModelDailyUsage, ParseDiagnostics
from claude_token_tracker.storage.repository import UsageRepository

app = typer.Typer()
console = Console()
err_console = Console(stderr=True)

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

NO_LOGS_MESSAGE = "No Claude projects directory found (looked in ~/.claude/projects and ~/.config/claude/projects)"

TOKEN_COLUMNS = ("Input", "Output", "Cache Create", "Cache Read", "Requests")


@dataclass
class CliState:
    """Per-invocation objects shared by the commands."""
    config: TrackerConfig
    repository: UsageRepository
    diagnostics: ParseDiagnostics


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False)],
        force=True,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a YAML config file"
    ),
    projects_dir: Optional[str] = typer.Option(
        None,
        "--projects-dir",
        "-p",
        help="Read logs from this directory instead of the default locations"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log skipped files and lines"
    )
):
    """Claude Token Tracker CLI."""
    _setup_logging(verbose)

    try:
        config = load_tracker_config(config_path) if config_path else TrackerConfig()
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        sys.exit(EXIT_CODE_FAIL)

    diagnostics = ParseDiagnostics()
    ctx.obj = CliState(
        config=config,
        repository=UsageRepository(
            projects_dir=projects_dir or config.projects_dir,
            diagnostics=diagnostics
        ),
        diagnostics=diagnostics
    )

    if ctx.invoked_subcommand is None:
        console.print("Claude Token Tracker - Use --help to see available commands")


@app.command()
def status(ctx: typer.Context):
    """Show where logs are read from and what was found."""
    state: CliState = ctx.obj
    projects_dir = state.repository.resolve_projects_dir()
    if projects_dir is None:
        console.print(f"[yellow]{NO_LOGS_MESSAGE}[/]")
        sys.exit(EXIT_CODE_PASS)

    projects = state.repository.get_usage_by_project()
    diagnostics = state.diagnostics

    console.print(f"[green]✓[/] Projects directory: {escape(str(projects_dir))}")
    console.print(f"Display unit: {get_unit_label(state.config.display_unit)}")
    console.print(f"Projects with usage: {len(projects)}")
    console.print(f"Session files read: {diagnostics.files_parsed}")
    if diagnostics.has_issues:
        console.print(
            f"[yellow]Skipped:[/] {diagnostics.malformed_lines} malformed lines, "
            f"{diagnostics.skipped_records} incomplete records, "
            f"{diagnostics.unreadable_files} unreadable files, "
            f"{diagnostics.unreadable_dirs} unreadable directories"
        )


@app.command()
def today(
    ctx: typer.Context,
    workspace: Optional[str] = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Only count usage for this workspace folder"
    ),
    unit: Optional[DisplayUnit] = typer.Option(
        None,
        "--unit",
        "-u",
        help="Display unit (overrides config)"
    )
):
    """Show today's usage as a one-line summary."""
    state: CliState = ctx.obj
    config = replace(state.config, display_unit=unit) if unit else state.config

    indicator = StatusIndicator(state.repository, config, workspace_path=workspace)
    result = indicator.refresh()

    console.print(result.text, markup=False)
    console.print(result.tooltip, markup=False)


@app.command()
def daily(
    ctx: typer.Context,
    workspace: Optional[str] = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Only count usage for this workspace folder"
    )
):
    """Show usage per day, most recent first."""
    state: CliState = ctx.obj
    if state.repository.resolve_projects_dir() is None:
        console.print(f"[yellow]{NO_LOGS_MESSAGE}[/]")
        sys.exit(EXIT_CODE_PASS)

    days = (
        state.repository.get_project_usage(workspace)
        if workspace
        else state.repository.get_all_usage()
    )
    if not days:
        console.print("\n[dim]No usage data found.[/]")
        sys.exit(EXIT_CODE_PASS)

    unit = state.config.display_unit
    table = Table(title="Daily Usage")
    table.add_column("Date")
    for column in TOKEN_COLUMNS:
        table.add_column(column, justify="right")
    table.add_column(get_unit_label(unit), justify="right")

    for day in days:
        table.add_row(
            day.date,
            *_token_cells(day.usage, day.request_count),
            format_usage(day.usage, unit, state.config.pricing)
        )

    console.print(table)


@app.command()
def models(
    ctx: typer.Context,
    workspace: Optional[str] = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Workspace folder (defaults to the current directory)"
    )
):
    """Show all-time usage per model for one project."""
    state: CliState = ctx.obj
    workspace_path = workspace or os.getcwd()
    project = state.repository.find_project(workspace_path)

    if project is None:
        folder_name = os.path.basename(os.path.normpath(workspace_path)) or workspace_path
        console.print(f"\n[bold]{escape(folder_name)}[/bold]")
        console.print("[dim]No usage data for this project[/]")
        sys.exit(EXIT_CODE_PASS)

    pricing = state.config.pricing
    model_totals = aggregate_by_model(project.model_daily_usage)

    table = Table(title=escape(project.display_name))
    table.add_column("Model")
    for column in TOKEN_COLUMNS:
        table.add_column(column, justify="right")
    table.add_column("Est. Cost", justify="right")
    table.add_column("Energy", justify="right")
    table.add_column("Trees", justify="right")

    total_cost = 0.0
    for model_usage in model_totals:
        cost = calculate_model_cost(model_usage.usage, model_usage.model, pricing)
        total_cost += cost
        table.add_row(
            escape(get_model_display_name(model_usage.model)),
            *_token_cells(model_usage.usage, model_usage.request_count),
            f"${cost:.4f}",
            f"{calculate_energy(model_usage.usage):.4f} kWh",
            f"{calculate_trees_burned(model_usage.usage):.6f}"
        )

    if len(model_totals) > 1:
        grand_total = sum_usage(model_totals)
        table.add_row(
            "Total",
            *_token_cells(grand_total.usage, grand_total.request_count),
            f"${total_cost:.4f}",
            f"{calculate_energy(grand_total.usage):.4f} kWh",
            f"{calculate_trees_burned(grand_total.usage):.6f}",
            style="bold"
        )

    console.print(table)


@app.command()
def projects(ctx: typer.Context):
    """Show a per-project breakdown by date and model."""
    state: CliState = ctx.obj
    if state.repository.resolve_projects_dir() is None:
        console.print(f"[yellow]{NO_LOGS_MESSAGE}[/]")
        sys.exit(EXIT_CODE_PASS)

    pricing = state.config.pricing
    project_list = state.repository.get_usage_by_project()
    if not project_list:
        console.print("\n[dim]No usage data found.[/]")
        sys.exit(EXIT_CODE_PASS)

    console.print("\n[bold]Claude Token Usage[/bold]")
    console.print(f"Display unit: {get_unit_label(state.config.display_unit)}")

    grand_usage = TokenUsage()
    grand_requests = 0
    grand_cost = 0.0

    for project in project_list:
        project_total = sum_usage(project.daily_usage)
        project_cost = _models_cost(project.model_daily_usage, pricing)

        table = Table(title=escape(project.display_name), show_footer=False)
        table.add_column("Date")
        table.add_column("Model")
        for column in TOKEN_COLUMNS:
            table.add_column(column, justify="right")
        table.add_column("Est. Cost", justify="right")

        for day, day_models in _group_by_date(project.model_daily_usage):
            for index, entry in enumerate(day_models):
                table.add_row(
                    day if index == 0 else "",
                    escape(get_model_display_name(entry.model)),
                    *_token_cells(entry.usage, entry.request_count),
                    f"${calculate_model_cost(entry.usage, entry.model, pricing):.2f}"
                )
            # Subtotal only when more than one model ran that day
            if len(day_models) > 1:
                day_total = sum_usage(day_models)
                table.add_row(
                    "",
                    "Day Total",
                    *_token_cells(day_total.usage, day_total.request_count),
                    f"${_models_cost(day_models, pricing):.2f}",
                    style="dim"
                )

        table.add_row(
            "Project Total",
            "",
            *_token_cells(project_total.usage, project_total.request_count),
            f"${project_cost:.2f}",
            style="bold"
        )
        console.print(table)

        grand_usage = grand_usage + project_total.usage
        grand_requests += project_total.request_count
        grand_cost += project_cost

    console.print("\n[bold]All Projects Total[/bold]")
    console.print(f"Input: {grand_usage.input_tokens:,}")
    console.print(f"Output: {grand_usage.output_tokens:,}")
    console.print(f"Requests: {grand_requests}")
    console.print(f"Est. cost: ${grand_cost:,.2f}")


def _token_cells(usage: TokenUsage, request_count: int) -> List[str]:
    """Format the token counters and request count for a table row."""
    return [
        f"{usage.input_tokens:,}",
        f"{usage.output_tokens:,}",
        f"{usage.cache_creation_input_tokens:,}",
        f"{usage.cache_read_input_tokens:,}",
        str(request_count),
    ]


def _models_cost(entries: List[ModelDailyUsage], pricing: PricingTable) -> float:
    """Cost of (date, model) buckets, each priced by its own model."""
    return sum(calculate_model_cost(entry.usage, entry.model, pricing) for entry in entries)


def _group_by_date(entries: List[ModelDailyUsage]):
    """Group (date, model) buckets by date, keeping their existing order."""
    groups = []
    for entry in entries:
        if groups and groups[-1][0] == entry.date:
            groups[-1][1].append(entry)
        else:
            groups.append((entry.date, [entry]))
    return groups


if __name__ == "__main__":
    app()

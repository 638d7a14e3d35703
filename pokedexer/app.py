"""Typer CLI entrypoint for Pokedexer."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence

import typer
import yaml
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from typer import BadParameter

from .config import ConfigRepository, GlobalConfig
from .engine import (
    DailySelector,
    IncrementalCollector,
    PassSummary,
    Record,
    RecordService,
    ScrollProximityTrigger,
)
from .logging_conf import app_log_path, configure_logging, tail_log
from .ui import ProgressActivity, ProgressReporter

app = typer.Typer(help="Pokedexer command line tool", no_args_is_help=True, rich_markup_mode=None)
config_app = typer.Typer(name="config", help="Inspect or create configuration", no_args_is_help=True)
log_app = typer.Typer(name="log", help="Inspect log files", no_args_is_help=True)

console = Console()


@dataclass
class AppState:
    repository: ConfigRepository
    config: GlobalConfig
    service_factory: Callable[[], RecordService]


def build_state(verbose: bool) -> AppState:
    repository = ConfigRepository()
    global_config = repository.load_global_config()
    configure_logging(verbose=verbose or global_config.verbose_logging)
    return AppState(
        repository=repository,
        config=global_config,
        service_factory=lambda: RecordService(global_config.catalog),
    )


def _get_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if state is None:
        state = build_state(verbose=False)
        ctx.obj = state
    return state


def _parse_date_option(value: Optional[str]) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise BadParameter("--date expects YYYY-MM-DD, e.g. 2024-03-15.") from exc


def _render_record_panel(record: Record) -> Panel:
    body = Table.grid(padding=(0, 1))
    body.add_column(style="dim")
    body.add_column()
    body.add_row("Number", record.number_label)
    body.add_row("Name", f"[bold]{record.display_name}[/bold]")
    body.add_row("Image", record.image_url or "-")
    if record.categories:
        body.add_row("Types", ", ".join(record.display_categories))
    return Panel(body, title="Pokemon of the Day", box=box.ROUNDED, expand=False)


def _render_records_table(records: Sequence[Record]) -> Table:
    table = Table(title=f"Collection · {len(records)} records", box=box.SIMPLE_HEAD)
    table.add_column("#", style="cyan", justify="right", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Types", style="magenta")
    table.add_column("Image", style="dim", overflow="fold")
    for record in records:
        table.add_row(
            str(record.id),
            record.display_name,
            " / ".join(record.display_categories),
            record.image_url or "-",
        )
    return table


def _render_summary_table(summaries: Sequence[PassSummary]) -> Table:
    table = Table(title="Fetch passes", box=box.MINIMAL_DOUBLE_HEAD)
    table.add_column("Range", style="cyan")
    table.add_column("Added", style="green", justify="right")
    table.add_column("Failed", style="red", justify="right")
    table.add_column("Skipped", style="yellow", justify="right")
    for summary in summaries:
        table.add_row(
            f"{summary.start_id}–{summary.end_id}",
            str(summary.appended),
            str(summary.failed),
            str(summary.skipped),
        )
    return table


async def _run_daily(state: AppState, day: date | None, activity: ProgressActivity) -> DailySelector:
    service = state.service_factory()
    clock = (lambda: day) if day is not None else date.today
    selector = DailySelector(service, clock=clock, catalog_max_id=state.config.catalog.catalog_max_id)
    activity.start("Fetching today's pick…")
    try:
        await selector.activate()
    finally:
        activity.close()
        await service.close()
    return selector


async def _run_browse(
    state: AppState, target: int | None, grow: int, reporter: ProgressReporter | None
) -> tuple[IncrementalCollector, list[PassSummary]]:
    service = state.service_factory()
    collector_cfg = state.config.collector
    if target is not None:
        collector_cfg = collector_cfg.model_copy(update={"initial_target": target})
    collector = IncrementalCollector.from_config(
        service,
        collector_cfg,
        catalog_max_id=state.config.catalog.catalog_max_id,
        progress=reporter,
    )
    trigger = ScrollProximityTrigger.from_config(collector, collector_cfg)
    summaries: list[PassSummary] = []
    try:
        first = await collector.initialize()
        if first is not None:
            summaries.append(first)
        for _ in range(grow):
            summary = await trigger.fire()
            if summary is not None and summary.attempted:
                summaries.append(summary)
    finally:
        await service.close()
    return collector, summaries


app.add_typer(config_app, name="config")
app.add_typer(log_app, name="log")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging", is_flag=True),
) -> None:
    ctx.obj = build_state(verbose)


@app.command("daily", help="Show the record picked for today (or --date).")
def daily(
    ctx: typer.Context,
    on_date: Optional[str] = typer.Option(None, "--date", help="Pick for a given day (YYYY-MM-DD)."),
) -> None:
    state = _get_state(ctx)
    day = _parse_date_option(on_date)
    activity = ProgressActivity(enabled=console.is_terminal, console=console)
    selector = asyncio.run(_run_daily(state, day, activity))
    if selector.current is None:
        console.print(f"Record #{selector.selected_id} is unavailable right now.", style="yellow")
        return
    console.print(_render_record_panel(selector.current))


@app.command("browse", help="Fetch the collection and grow it as a scroll trigger would.")
def browse(
    ctx: typer.Context,
    target: Optional[int] = typer.Option(None, "--target", min=0, help="Initial target count."),
    grow: int = typer.Option(0, "--grow", min=0, help="Number of growth triggers to fire."),
) -> None:
    state = _get_state(ctx)
    reporter = ProgressReporter(enabled=state.config.enable_progress_bar, console=console)
    reporter.set_label("browse")
    collector, summaries = asyncio.run(_run_browse(state, target, grow, reporter))
    console.print(_render_records_table(collector.records))
    if summaries:
        console.print(_render_summary_table(summaries))
    if collector.exhausted:
        console.print("Catalog fully collected.", style="dim")


@config_app.command("show", help="Print the effective configuration.")
def config_show(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    console.print(
        yaml.safe_dump(state.config.model_dump(mode="json"), sort_keys=False),
        markup=False,
        highlight=False,
    )


@config_app.command("init", help="Show where the configuration lives, or reset it with --force.")
def config_init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Reset the file to defaults.", is_flag=True),
) -> None:
    state = _get_state(ctx)
    path = state.repository.locator.global_config_path()
    if path.exists() and not force:
        console.print(f"Configuration already exists: {path}", style="yellow")
        return
    written = state.repository.save_global_config(GlobalConfig())
    state.config = state.repository.load_global_config()
    console.print(f"Configuration written to {written}", style="green")


@log_app.command("tail", help="Show the last lines of the application log.")
def log_tail(
    lines: int = typer.Option(50, "--lines", "-n", min=1, help="Number of lines to show."),
) -> None:
    path = app_log_path()
    content = tail_log(path, lines)
    if not content:
        console.print("Log is empty.", style="dim")
        return
    for line in content:
        console.print(line.rstrip("\n"), markup=False, highlight=False)


__all__ = ["AppState", "app", "build_state", "cli"]


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()

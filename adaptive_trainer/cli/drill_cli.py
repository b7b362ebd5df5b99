"""
Adaptive Decision Trainer: Main CLI.

A Rich terminal interface for situational drills with spaced repetition
follow-up.

Commands:
- adaptive-trainer drill     - Start an interactive drill session
- adaptive-trainer next      - Show which scenario comes next
- adaptive-trainer stats     - Show session statistics
- adaptive-trainer reset     - Clear the saved session
- adaptive-trainer catalog   - List scenarios in the pack
- adaptive-trainer filter    - Show, set or clear the scenario filter
"""
from __future__ import annotations

import random
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from adaptive_trainer.config import get_settings
from adaptive_trainer.drill.drill_session import (
    AnswerQuality,
    DrillSession,
    create_drill_session,
    utc_now,
)
from adaptive_trainer.drill.grading import DisplayedOption, grade_choice, shuffle_options
from adaptive_trainer.drill.scenario_catalog import (
    Level,
    Position,
    ScenarioCatalog,
    ScenarioRecord,
    Sport,
    check_pack_quality,
    load_scenario_pack,
)
from adaptive_trainer.drill.scenario_filter import ScenarioFilter, filter_scenarios
from adaptive_trainer.drill.scheduler import apply_result, due_scenarios, pick_next_scenario
from adaptive_trainer.drill.session_store import SessionStore
from adaptive_trainer.drill.stats import get_drill_stats
from adaptive_trainer.exceptions import ScenarioPackError

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="adaptive-trainer",
    help="Adaptive Decision Trainer: situational drills with spaced repetition",
    no_args_is_help=True,
)
filter_app = typer.Typer(help="Show, set or clear the scenario filter")
app.add_typer(filter_app, name="filter")

console = Console()


# =============================================================================
# Styling
# =============================================================================

STYLES = {
    "warning": "bold yellow",
    "quality": {
        AnswerQuality.BEST: "bold green",
        AnswerQuality.OK: "bold yellow",
        AnswerQuality.BAD: "bold red",
        AnswerQuality.TIMEOUT: "bold magenta",
    },
}

QUALITY_HEADLINES = {
    AnswerQuality.BEST: "Best play!",
    AnswerQuality.OK: "OK, but there's a better play.",
    AnswerQuality.BAD: "Not the right play.",
    AnswerQuality.TIMEOUT: "Time's up.",
}


# =============================================================================
# Shared Setup
# =============================================================================


def _load_catalog(pack: Optional[Path]) -> ScenarioCatalog:
    """Load the scenario pack or exit with an error."""
    path = pack or get_settings().scenario_pack
    try:
        return load_scenario_pack(path)
    except ScenarioPackError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


def _open_store() -> SessionStore:
    return SessionStore(get_settings().state_dir)


def _load_or_create_session(store: SessionStore) -> DrillSession:
    session = store.load_session()
    if session is None:
        session = create_drill_session(get_settings().session_id)
        logger.info(f"Created new session {session.id}")
    return session


def _drill_pool(catalog: ScenarioCatalog, scenario_filter: ScenarioFilter) -> list[ScenarioRecord]:
    pool = filter_scenarios(catalog, scenario_filter)
    if scenario_filter.is_active:
        logger.info(f"Filter '{scenario_filter.describe()}' keeps {len(pool)}/{len(catalog)} scenarios")
    return pool


# =============================================================================
# Display Helpers
# =============================================================================


def display_scenario(scenario: ScenarioRecord, options: list[DisplayedOption], index: int) -> None:
    """Display a scenario with its shuffled answer options."""
    header = (
        f"Rep {index}  |  {scenario.sport.value.upper()}  |  {scenario.level.value.upper()}  |  "
        f"{scenario.category.replace('-', ' ').upper()}"
    )
    if scenario.position:
        header += f"  |  {scenario.position.value}"

    content = ""
    if scenario.title:
        content += f"[bold]{escape(scenario.title)}[/bold]\n\n"
    if scenario.description:
        content += f"{escape(scenario.description)}\n\n"
    content += f"[dim]{scenario.situation}[/dim]\n\n"
    content += f"[bold cyan]{escape(scenario.question or 'What is the best play?')}[/bold cyan]\n"
    for displayed in options:
        content += f"\n  {displayed.key}. {escape(displayed.option.label)}"

    console.print(Panel(
        content,
        title=escape(header),
        title_align="left",
        border_style="cyan",
        padding=(1, 2),
    ))


def display_reveal(scenario: ScenarioRecord, quality: AnswerQuality, chosen: DisplayedOption | None) -> None:
    """Display the graded result, the best play and its coaching cue."""
    style = STYLES["quality"][quality]
    content = f"[{style}]{QUALITY_HEADLINES[quality]}[/{style}]\n"

    if chosen is not None and quality is not AnswerQuality.BEST:
        content += f"\nYou chose: {escape(chosen.option.label)}"
        if chosen.option.description:
            content += f"\n[dim]{escape(chosen.option.description)}[/dim]"
        content += "\n"

    content += f"\n[bold green]Best play:[/bold green] {escape(scenario.best.label)}"
    if scenario.best.description:
        content += f"\n{escape(scenario.best.description)}"
    if scenario.best.coaching_cue:
        content += f"\n\n[bold]Coaching cue:[/bold] {escape(scenario.best.coaching_cue)}"

    console.print(Panel(content, border_style=style.split()[-1], padding=(1, 2)))


def _ask_answer(options: list[DisplayedOption], time_limit: float) -> tuple[DisplayedOption | None, float]:
    """Prompt for an answer; returns the chosen option and elapsed seconds."""
    keys = [o.key for o in options]
    start_time = time.monotonic()
    answer = Prompt.ask(
        f"\nYour call ({'/'.join(keys)}, {time_limit:.0f}s)",
        choices=keys + [k.lower() for k in keys],
        show_choices=False,
    ).upper()
    elapsed = time.monotonic() - start_time

    chosen = next((o for o in options if o.key == answer), None)
    return chosen, elapsed


def _display_session_summary(pool: list[ScenarioRecord], session: DrillSession, answered: int) -> None:
    stats = get_drill_stats(pool, session)
    seen = stats.catalog_size - stats.scenarios_remaining
    console.print(Panel(
        f"[bold]Drill Complete![/bold]\n\n"
        f"Scenarios answered this run: {answered}\n"
        f"Accuracy: {stats.correct_percent:.0f}%\n"
        f"Scenarios seen: {seen}/{stats.catalog_size}",
        title="Summary",
        border_style="green",
    ))


# =============================================================================
# Commands
# =============================================================================


@app.command()
def drill(
    pack: Optional[Path] = typer.Option(
        None,
        "--pack", "-p",
        help="Scenario pack JSON file (defaults to the bundled starter pack)",
    ),
    limit: int = typer.Option(
        0,
        "--limit", "-l",
        min=0,
        help="Stop after this many scenarios (0 = until nothing is due)",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for answer option order",
    ),
) -> None:
    """
    Start an interactive drill session.

    Presents new scenarios first, then brings back the ones you missed as
    they come due. Progress is saved after every answer.
    """
    settings = get_settings()
    catalog = _load_catalog(pack)
    store = _open_store()
    session = _load_or_create_session(store)
    scenario_filter = store.load_filter()
    pool = _drill_pool(catalog, scenario_filter)
    rng = random.Random(seed)

    console.print("\n[bold cyan]Adaptive Decision Trainer[/bold cyan]", style="bold")
    console.print("=" * 40)
    console.print(f"[dim]Pack: {escape(catalog.name)}  |  Filter: {escape(scenario_filter.describe())}[/dim]\n")

    if not pool:
        console.print("[yellow]No scenarios match the current filter.[/yellow]")
        console.print("Run 'adaptive-trainer filter clear' to drill everything.")
        raise typer.Exit(0)

    answered = 0

    try:
        while True:
            scenario = pick_next_scenario(pool, session)

            if scenario is None:
                console.print(Panel(
                    "All scenarios are rested. Come back later to keep drilling!",
                    border_style="cyan",
                ))
                if not Confirm.ask("Start a new session?", default=False):
                    break
                store.clear_session()
                session = create_drill_session(settings.session_id)
                continue

            options = shuffle_options(scenario, rng)
            display_scenario(scenario, options, answered + 1)

            chosen, elapsed = _ask_answer(options, settings.answer_time_limit_seconds)
            quality = grade_choice(chosen, elapsed, settings.answer_time_limit_seconds)

            apply_result(session, scenario.id, quality)
            store.save_session(session)
            answered += 1

            display_reveal(scenario, quality, chosen)

            if limit and answered >= limit:
                break

            Prompt.ask("[dim]Press Enter for the next scenario[/dim]", default="", show_default=False)

    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[yellow]Drill interrupted.[/yellow]")

    _display_session_summary(pool, session, answered)


@app.command("next")
def next_scenario(
    pack: Optional[Path] = typer.Option(None, "--pack", "-p", help="Scenario pack JSON file"),
    limit: int = typer.Option(5, "--limit", "-l", min=1, help="Number of queued scenarios to show"),
) -> None:
    """Show the scenario that would be presented now, and the queue behind it."""
    catalog = _load_catalog(pack)
    store = _open_store()
    session = _load_or_create_session(store)
    pool = _drill_pool(catalog, store.load_filter())

    queue = due_scenarios(pool, session)
    if not queue:
        console.print("[green]Nothing due right now.[/green] All scenarios are rested.")
        return

    table = Table(title="Up Next")
    table.add_column("#", style="dim")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Status")

    for i, scenario in enumerate(queue[:limit], 1):
        status = "[yellow]due[/yellow]" if scenario.id in session.progress else "[green]new[/green]"
        table.add_row(str(i), escape(scenario.id), escape(scenario.title), status)

    console.print(table)
    if len(queue) > limit:
        console.print(f"[dim]...and {len(queue) - limit} more[/dim]")


@app.command()
def stats(
    pack: Optional[Path] = typer.Option(None, "--pack", "-p", help="Scenario pack JSON file"),
) -> None:
    """Show drill statistics for the saved session."""
    catalog = _load_catalog(pack)
    store = _open_store()
    session = _load_or_create_session(store)
    drill_stats = get_drill_stats(catalog, session)
    ready = len(due_scenarios(catalog, session))

    console.print("\n[bold cyan]Drill Statistics[/bold cyan]")
    console.print("=" * 40)

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="dim")
    table.add_column("Value", style="bold")

    table.add_row("Accuracy", f"{drill_stats.correct_percent:.1f}%")
    table.add_row("Scenarios seen", f"{drill_stats.scenarios_seen}/{drill_stats.catalog_size}")
    table.add_row("Total attempts", str(drill_stats.total_attempts))
    table.add_row("Average ease", f"{drill_stats.average_ease:.2f}x")
    table.add_row("Average interval", f"{drill_stats.average_interval:.1f} days")
    table.add_row("Ready now", str(ready))

    console.print(table)


@app.command()
def reset(
    confirm: bool = typer.Option(
        False,
        "--yes", "-y",
        help="Skip confirmation",
    ),
) -> None:
    """Clear the saved session for a fresh start."""
    if not confirm and not Confirm.ask("Reset ALL drill progress? This cannot be undone!", default=False):
        raise typer.Exit(0)

    store = _open_store()
    if store.clear_session():
        console.print("[green]Drill session has been reset.[/green]")
    else:
        console.print("[dim]No saved session to reset.[/dim]")


@app.command()
def catalog(
    pack: Optional[Path] = typer.Option(None, "--pack", "-p", help="Scenario pack JSON file"),
) -> None:
    """List scenarios in the pack with their review status."""
    scenario_catalog = _load_catalog(pack)
    session = _load_or_create_session(_open_store())
    now = utc_now()

    table = Table(title=escape(f"{scenario_catalog.name} (v{scenario_catalog.version})"))
    table.add_column("ID")
    table.add_column("Sport")
    table.add_column("Level")
    table.add_column("Category")
    table.add_column("Position")
    table.add_column("Status")

    for scenario in scenario_catalog:
        record = session.progress.get(scenario.id)
        if record is None:
            status = "[green]new[/green]"
        elif record.is_due(now):
            status = "[yellow]due[/yellow]"
        else:
            status = f"[dim]rested until {_format_due(record.next_due)}[/dim]"
        table.add_row(
            escape(scenario.id),
            scenario.sport.value,
            scenario.level.value,
            escape(scenario.category),
            scenario.position.value if scenario.position else "-",
            status,
        )

    console.print(table)

    warnings = check_pack_quality(scenario_catalog)
    if warnings:
        console.print(f"\n[{STYLES['warning']}]Pack quality warnings:[/{STYLES['warning']}]")
        for warning in warnings:
            console.print(f"  - {escape(warning)}")


def _format_due(when: datetime) -> str:
    return when.astimezone().strftime("%Y-%m-%d %H:%M")


# =============================================================================
# Filter Commands
# =============================================================================


@filter_app.command("show")
def filter_show() -> None:
    """Show the saved scenario filter."""
    scenario_filter = _open_store().load_filter()
    console.print(f"Filter: [bold]{scenario_filter.describe()}[/bold]")


@filter_app.command("set")
def filter_set(
    sport: Optional[list[Sport]] = typer.Option(None, "--sport", "-s", help="Sport to include"),
    level: Optional[list[Level]] = typer.Option(None, "--level", "-l", help="Level to include"),
    category: Optional[list[str]] = typer.Option(None, "--category", "-c", help="Category to include"),
    position: Optional[list[Position]] = typer.Option(None, "--position", help="Position to include"),
) -> None:
    """Restrict drilling to matching scenarios (repeat an option to allow several values)."""
    scenario_filter = ScenarioFilter(
        sports=[s.value for s in sport or []],
        levels=[lv.value for lv in level or []],
        categories=list(category or []),
        positions=[p.value for p in position or []],
    )
    _open_store().save_filter(scenario_filter)
    console.print(f"[green]Filter saved:[/green] {scenario_filter.describe()}")


@filter_app.command("clear")
def filter_clear() -> None:
    """Remove the saved scenario filter."""
    _open_store().clear_filter()
    console.print("[green]Filter cleared.[/green] Drilling all scenarios.")


# =============================================================================
# Entry Point
# =============================================================================


def configure_logging() -> None:
    """Route loguru output according to settings."""
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(
            settings.log_file,
            level="DEBUG",
            rotation="10 MB",
            retention=5,
            encoding="utf-8",
        )


def main() -> None:
    """CLI entry point."""
    configure_logging()
    app()


if __name__ == "__main__":
    main()

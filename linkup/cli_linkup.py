"""CLI subcommands for LinkUp."""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from linkup.config import load_config
from linkup.errors import LinkUpError
from linkup.game import LinkUpGame
from linkup.puzzle_loader import PuzzleLoader
from linkup.scoring import calculate_score
from linkup.session import GameMode, GameSession, daily_seed
from linkup.validator import LinkValidator, is_hub_word
from shared.utils.logging import setup_logging

app = typer.Typer(help="Play LinkUp word-chain puzzles", no_args_is_help=True)
console = Console()


def _build_validator(config_file: Optional[str]) -> LinkValidator:
    config = load_config(Path(config_file) if config_file else None)
    return LinkValidator.from_config(config)


def _parse_date(value: Optional[str]) -> date:
    if value is None:
        return date.today()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        console.print(f"[red]Error: invalid date {value!r}, expected YYYY-MM-DD[/red]")
        raise typer.Exit(1)


@app.command()
def play(
    mode: GameMode = typer.Option(GameMode.DAILY, "--mode", "-m", help="daily or practice"),
    seed: Optional[int] = typer.Option(None, help="Seed for the practice pair (daily uses today's date)"),
    start: Optional[str] = typer.Option(None, help="Custom start word (requires --end)"),
    end: Optional[str] = typer.Option(None, help="Custom target word (requires --start)"),
    config_file: Optional[str] = typer.Option(None, "--config", help="Path to config YAML"),
    log_path: str = typer.Option("logs/linkup", help="Directory for log files"),
    verbose: bool = typer.Option(False, help="Enable verbose logging"),
):
    """Play a LinkUp puzzle interactively."""
    setup_logging(Path(log_path), verbose)
    logger = logging.getLogger(__name__)

    try:
        validator = _build_validator(config_file)

        if start or end:
            if not (start and end):
                console.print("[red]Error: --start and --end must be given together[/red]")
                raise typer.Exit(1)
            session = GameSession(start, end, mode=GameMode.PRACTICE, seed=seed or 0)
        else:
            game_seed = daily_seed() if mode == GameMode.DAILY else seed
            pair = PuzzleLoader().get_pair(mode, game_seed)
            session = GameSession(pair.start, pair.end, mode=mode, seed=game_seed or 0)
    except LinkUpError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    logger.info(f"Playing {mode.value} puzzle {session.start_word} -> {session.end_word}")
    LinkUpGame(session, validator).play()


@app.command()
def check(
    previous: str = typer.Argument(..., help="Word the chain currently ends at"),
    candidate: str = typer.Argument(..., help="Word to try next"),
    used: str = typer.Option("", help="Comma-separated words already in the chain"),
    config_file: Optional[str] = typer.Option(None, "--config", help="Path to config YAML"),
    verbose: bool = typer.Option(False, help="Enable verbose logging"),
):
    """Validate a single link without starting a game."""
    setup_logging(None, verbose)

    try:
        validator = _build_validator(config_file)
    except LinkUpError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    used_words = [w.strip() for w in used.split(",") if w.strip()]
    result = validator.validate_link(previous, candidate, used_words)

    if not result.valid:
        console.print(f"[red]✗ {result.word}: {result.message}[/red] [dim]({result.reason.value})[/dim]")
        raise typer.Exit(2)

    table = Table(title=f"{previous} → {result.word}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("Relation", f"{result.relation_label} ({result.relation_kind.value})")
    table.add_row("Heat", f"{result.heat:.3f}")
    table.add_row("Creativity stars", str(result.creativity_stars))
    table.add_row("Frequency", f"{result.frequency:.3f}")
    table.add_row("Hub word", "yes" if result.is_hub_word else "no")
    console.print(table)


@app.command()
def score(
    chain_length: int = typer.Argument(..., min=0, help="Number of links in the chain"),
    hub_penalties: int = typer.Argument(0, min=0, help="Number of hub words used"),
    total_stars: int = typer.Argument(0, min=0, help="Sum of creativity stars"),
):
    """Show the score breakdown for a completed chain."""
    result = calculate_score(chain_length, hub_penalties, total_stars)

    table = Table(title="LinkUp Score")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta", justify="right")
    table.add_row("Steps", str(result.steps))
    table.add_row("Effective steps", str(result.effective_steps))
    table.add_row("Star bonus", f"{result.star_bonus:.1f}")
    table.add_row("Final score", f"{result.final_score:.1f}")
    console.print(table)


@app.command()
def daily(
    on: Optional[str] = typer.Option(None, "--date", help="Date as YYYY-MM-DD (default: today)"),
):
    """Show the daily puzzle pair."""
    day = _parse_date(on)
    seed = daily_seed(day)

    try:
        pair = PuzzleLoader().get_daily_pair(seed)
    except LinkUpError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]{day.isoformat()}[/bold]: [cyan]{pair.start.upper()}[/cyan] → [magenta]{pair.end.upper()}[/magenta]")


@app.command()
def hub(
    word: str = typer.Argument(..., help="Word to check"),
    config_file: Optional[str] = typer.Option(None, "--config", help="Path to config YAML"),
):
    """Check whether a word is a hub word (costs an extra step)."""
    try:
        config = load_config(Path(config_file) if config_file else None)
    except LinkUpError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if is_hub_word(word, config.hub_words):
        console.print(f"[yellow]{word}[/yellow] is a hub word: using it adds a penalty step")
    else:
        console.print(f"[green]{word}[/green] is not a hub word")

"""Interactive console game for LinkUp."""

import logging
import time
from typing import Callable, Dict, Optional

from rich.console import Console
from rich.table import Table

from linkup.session import GameSession, GameStatus
from linkup.validator import LinkValidator

console = Console()
logger = logging.getLogger(__name__)

QUIT_COMMANDS = {"/quit", "/q", "/giveup"}
RESTART_COMMANDS = {"/restart"}


def _stars(count: int) -> str:
    return "★" * count + "☆" * (3 - count)


class LinkUpGame:
    """Play one LinkUp puzzle on the console.

    The player types words until the chain reaches the target word or they
    type ``/quit``. ``/restart`` starts the same puzzle over.
    """

    def __init__(
        self,
        session: GameSession,
        validator: LinkValidator,
        input_fn: Optional[Callable[[str], str]] = None,
        quiet: bool = False,
    ):
        self.session = session
        self.validator = validator
        self.input_fn = input_fn or console.input
        self.quiet = quiet

        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.attempts = 0
        self.rejections = 0

    def _print(self, *args, **kwargs):
        """Print to console unless in quiet mode."""
        if not self.quiet:
            console.print(*args, **kwargs)

    def display_intro(self):
        self._print("[bold]🔗 LinkUp[/bold]")
        self._print(
            f"Get from [cyan]{self.session.start_word.upper()}[/cyan] "
            f"to [magenta]{self.session.end_word.upper()}[/magenta] in as few links as you can."
        )
        self._print("[dim]Each word must relate to the one before it. /quit to give up, /restart to start over.[/dim]\n")

    def display_chain(self):
        words = [self.session.start_word.upper()] + [link.word.upper() for link in self.session.chain]
        self._print("[bold]Chain:[/bold] " + " → ".join(words) + f"  [dim](target: {self.session.end_word.upper()})[/dim]")

    def play_turn(self, word: str) -> bool:
        """Submit one word. Returns True if it was accepted."""
        self.attempts += 1
        result = self.session.submit(word, self.validator)

        if not result.valid:
            self.rejections += 1
            self._print(f"[red]✗ {result.word}: {result.message}[/red]")
            return False

        hub_note = " [yellow](hub word: +1 step)[/yellow]" if result.is_hub_word else ""
        self._print(
            f"[green]✓ {result.word.upper()}[/green] {result.relation_label} "
            f"[yellow]{_stars(result.creativity_stars)}[/yellow]{hub_note}"
        )
        return True

    def display_results(self):
        """Show the score breakdown and the most creative link."""
        score = self.session.score()

        if self.session.status == GameStatus.WON:
            self._print(f"\n[bold green]🎉 Solved! {self.session.start_word.upper()} → {self.session.end_word.upper()}[/bold green]")
        else:
            self._print(f"\n[bold yellow]Gave up after {self.session.chain_length} links.[/bold yellow]")

        table = Table(title="LinkUp Score")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="magenta", justify="right")
        table.add_row("Steps", str(score.steps))
        table.add_row("Hub penalties", str(self.session.penalty_steps))
        table.add_row("Effective steps", str(score.effective_steps))
        table.add_row("Star bonus", f"-{score.star_bonus:.1f}")
        table.add_row("Final score", f"{score.final_score:.1f}")
        self._print(table)

        best = self.session.most_creative_link()
        if best is not None:
            self._print(
                f"Most creative link: [bold]{best.word.upper()}[/bold] "
                f"({best.relation_label}, {_stars(best.creativity_stars)}, heat {best.heat:.2f})"
            )

    def play(self) -> Dict:
        """Run the game loop and return the session summary."""
        self.start_time = time.time()
        logger.info(f"Starting LinkUp game: {self.session.start_word} -> {self.session.end_word}")
        self.display_intro()

        while not self.session.is_over:
            self.display_chain()
            try:
                raw = self.input_fn(f"Next word after [bold]{self.session.current_word.upper()}[/bold]: ")
            except (EOFError, KeyboardInterrupt):
                raw = "/quit"

            word = raw.strip()
            if not word:
                continue
            if word.lower() in QUIT_COMMANDS:
                self.session.give_up()
                break
            if word.lower() in RESTART_COMMANDS:
                self.session.reset()
                self._print("[dim]Chain cleared.[/dim]")
                continue

            self.play_turn(word)

        self.end_time = time.time()
        self.display_results()

        result = self.session.to_dict()
        result.update({
            "attempts": self.attempts,
            "rejections": self.rejections,
            "duration": self.end_time - self.start_time,
        })
        logger.info(
            f"Game over: status={result['status']}, final score={result['score']['final_score']}, "
            f"attempts={self.attempts}"
        )
        return result

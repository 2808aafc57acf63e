"""Command-line interface for LinkUp.

- `linkup puzzle play` - Play the daily (or a practice) puzzle
- `linkup puzzle check` - Validate a single link
- `linkup puzzle score` - Score a completed chain
- `linkup puzzle daily` - Show the daily word pair
- `linkup puzzle hub` - Check for hub words
"""

import typer
from rich.console import Console

from linkup.cli_linkup import app as linkup_app

app = typer.Typer(
    help="LinkUp - Word-chain puzzles powered by Datamuse",
    no_args_is_help=True,
)
console = Console()

app.add_typer(linkup_app, name="puzzle", help="Play and inspect LinkUp puzzles")


@app.callback()
def main():
    """LinkUp - transform one word into another, one related word at a time.

    Examples:

        # Play today's puzzle
        uv run linkup puzzle play

        # Practice with a random pair
        uv run linkup puzzle play --mode practice

        # Check whether a link is valid
        uv run linkup puzzle check ocean wave --used ocean
    """
    pass


@app.command()
def version():
    """Show version information."""
    from linkup import __version__ as linkup_version
    from shared import __version__ as shared_version

    console.print("[bold]LinkUp[/bold]")
    console.print(f"  linkup: {linkup_version}")
    console.print(f"  shared: {shared_version}")


if __name__ == "__main__":
    app()

"""Output formatting for xlocate commands."""

import json
from collections.abc import Mapping
from collections.abc import Sequence
from pathlib import Path

import typer

from xlocate.models import XboxEntry


def print_entry(entry: XboxEntry) -> None:
    """Print one resolved package with its details."""
    typer.secho(f"{entry.name}", bold=True)
    typer.secho(f"  app id:    {entry.app_id}", fg=typer.colors.BRIGHT_BLACK)
    typer.secho(f"  publisher: {entry.publisher_id}", fg=typer.colors.BRIGHT_BLACK)
    typer.secho(f"  launch:    {entry.execution_name}", fg=typer.colors.BRIGHT_BLACK)
    typer.secho(f"  path:      {entry.game_path}", fg=typer.colors.BRIGHT_BLACK)


def print_entries(entries: Sequence[XboxEntry]) -> None:
    """Print a table of resolved packages followed by a summary line."""
    if entries:
        width = max(len(entry.app_id) for entry in entries)
        for entry in entries:
            typer.echo(f"{entry.app_id:<{width}}  {entry.name}")
            typer.secho(
                f"{'':<{width}}  {entry.game_path}", fg=typer.colors.BRIGHT_BLACK
            )

    count = len(entries)
    typer.secho(
        f"✓ {count} game{'s' if count != 1 else ''} found",
        fg=typer.colors.GREEN,
        bold=True,
    )


def print_game_paths(game_paths: Mapping[str, str]) -> None:
    """Print identity -> install directory pairs found on disk."""
    for app_id, game_path in game_paths.items():
        typer.echo(f"{app_id}")
        typer.secho(f"  {game_path}", fg=typer.colors.BRIGHT_BLACK)

    count = len(game_paths)
    typer.secho(
        f"✓ {count} installed game{'s' if count != 1 else ''} found",
        fg=typer.colors.GREEN,
        bold=True,
    )


def print_gaming_roots(gaming_roots: Sequence[str]) -> None:
    """Print the Xbox games folders found on each drive."""
    for gaming_root in gaming_roots:
        typer.echo(gaming_root)
    if not gaming_roots:
        typer.secho("No Xbox games folder found", fg=typer.colors.BRIGHT_BLACK)


def print_store_unavailable() -> None:
    """Tell the user there is no Xbox app to query."""
    typer.secho(
        "Xbox app is not installed (or not available on this system)",
        fg=typer.colors.YELLOW,
        err=True,
    )


def print_error(message: str) -> None:
    """Print an error line to stderr."""
    typer.secho(f"✗ {message}", fg=typer.colors.RED, bold=True, err=True)


def print_json(data: object) -> None:
    """Print data as indented JSON on stdout."""
    typer.echo(json.dumps(data, indent=2))


def print_saved(message: str, path: Path) -> None:
    """Confirm a settings change and where it was written."""
    typer.secho(f"✓ {message}", fg=typer.colors.GREEN, bold=True)
    typer.secho(f"  saved to {path}", fg=typer.colors.BRIGHT_BLACK)


def print_unchanged(message: str) -> None:
    """Report a settings change that was already in place."""
    typer.secho(message, fg=typer.colors.YELLOW)

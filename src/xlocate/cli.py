"""Command-line interface for xlocate."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from xlocate import __version__
from xlocate.config import Settings
from xlocate.exceptions import ArgumentInvalidError
from xlocate.exceptions import ConfigValidationError
from xlocate.exceptions import GameEntryNotFoundError
from xlocate.exceptions import XlocateError
from xlocate.operations import find_installed_games
from xlocate.operations import find_xbox_gaming_root_paths
from xlocate.output import print_entries
from xlocate.output import print_entry
from xlocate.output import print_error
from xlocate.output import print_game_paths
from xlocate.output import print_gaming_roots
from xlocate.output import print_json
from xlocate.output import print_saved
from xlocate.output import print_store_unavailable
from xlocate.output import print_unchanged
from xlocate.store import XboxStore

app = typer.Typer(help="Find games installed through the Xbox app")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"xlocate {__version__}")
        raise typer.Exit()


def _config_path(ctx: typer.Context) -> Path | None:
    return ctx.obj.get("config") if ctx.obj else None


def _settings(ctx: typer.Context) -> Settings:
    try:
        return Settings.load(_config_path(ctx))
    except ConfigValidationError as e:
        print_error(f"Config error: {e}")
        raise typer.Exit(1) from None


def _save(ctx: typer.Context, settings: Settings) -> Path:
    try:
        return settings.save(_config_path(ctx))
    except OSError as e:
        print_error(f"Unable to write config: {e}")
        raise typer.Exit(1) from None


def _store(ctx: typer.Context) -> XboxStore:
    """Build the store session, exiting quietly if the Xbox app is missing."""
    store = XboxStore(settings=_settings(ctx))
    if not store.is_store_installed():
        print_store_unavailable()
        raise typer.Exit(0)
    return store


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version"
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log discovery details")
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", help="Config file (default: user config dir)"),
    ] = None,
) -> None:
    """Find games installed through the Xbox app."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"config": config}


JsonOption = Annotated[bool, typer.Option("--json", help="Print entries as JSON")]


@app.command()
def games(ctx: typer.Context, as_json: JsonOption = False) -> None:
    """List games registered with the Xbox app."""
    store = _store(ctx)
    entries = store.all_games()
    if as_json:
        print_json([entry.to_dict() for entry in entries])
    else:
        print_entries(entries)


@app.command()
def installed(
    ctx: typer.Context,
    search_path: Annotated[
        list[str] | None,
        typer.Option(
            "--search-path", "-s", help="Drive root to scan (repeatable, default: all)"
        ),
    ] = None,
) -> None:
    """List games found in the Xbox games folder of each drive."""
    search_paths = search_path or _settings(ctx).search_paths
    print_game_paths(find_installed_games(search_paths))


@app.command()
def roots(
    ctx: typer.Context,
    search_path: Annotated[
        list[str] | None,
        typer.Option(
            "--search-path", "-s", help="Drive root to scan (repeatable, default: all)"
        ),
    ] = None,
) -> None:
    """List the Xbox games folder named by each drive's .GamingRoot file."""
    search_paths = search_path or _settings(ctx).search_paths
    print_gaming_roots(find_xbox_gaming_root_paths(search_paths))


@app.command()
def find(
    ctx: typer.Context,
    app_ids: Annotated[list[str], typer.Argument(help="Package identity name(s)")],
    as_json: JsonOption = False,
) -> None:
    """Show the first game matching one of the given app ids."""
    store = _store(ctx)
    try:
        entry = store.find_by_app_id(app_ids)
    except GameEntryNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(1) from None

    if as_json:
        print_json(entry.to_dict())
    else:
        print_entry(entry)


@app.command()
def search(
    ctx: typer.Context,
    pattern: Annotated[str, typer.Argument(help="Regular expression for the name")],
) -> None:
    """Show the first game whose name matches a pattern."""
    store = _store(ctx)
    try:
        print_entry(store.find_by_name(pattern))
    except (GameEntryNotFoundError, ArgumentInvalidError) as e:
        print_error(str(e))
        raise typer.Exit(1) from None


@app.command()
def launch(
    ctx: typer.Context,
    app_id: Annotated[str, typer.Argument(help="Package identity name")],
) -> None:
    """Launch a game through the Xbox app."""
    store = _store(ctx)
    try:
        store.launch_game(app_id)
    except (GameEntryNotFoundError, ArgumentInvalidError) as e:
        print_error(str(e))
        raise typer.Exit(1) from None
    except XlocateError as e:
        print_error(f"Error: {e}")
        raise typer.Exit(1) from None


config_app = typer.Typer(help="Show or change xlocate settings")
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Print the settings in effect."""
    print_json(_settings(ctx).to_dict())


@config_app.command("add-search-path")
def config_add_search_path(
    ctx: typer.Context,
    volume_root: Annotated[str, typer.Argument(help="Drive root, e.g. D:\\")],
) -> None:
    """Add a drive root to the configured search paths."""
    settings = _settings(ctx)
    if not settings.add_search_path(volume_root):
        print_unchanged(f"{volume_root} is already a search path")
        return
    path = _save(ctx, settings)
    print_saved(f"Added search path {volume_root}", path)


@config_app.command("ignore")
def config_ignore(
    ctx: typer.Context,
    prefix: Annotated[str, typer.Argument(help="Package name prefix")],
) -> None:
    """Stop listing packages whose name starts with a prefix."""
    settings = _settings(ctx)
    if not settings.add_ignore_prefix(prefix):
        print_unchanged(f"{prefix} is already ignored")
        return
    path = _save(ctx, settings)
    print_saved(f"Ignoring packages starting with {prefix.lower()}", path)


def main() -> None:
    """Main entry point for the xlocate CLI."""
    app()


if __name__ == "__main__":
    main()

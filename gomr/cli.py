"""gomr CLI — the main entry point for managing local Go module replaces."""

import logging
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gomr import __version__
from gomr.config import load_config
from gomr.coordinator import ReplaceCoordinator
from gomr.errors import ExternalToolError, GomrError
from gomr.gomod import GoMod

console = Console()
err_console = Console(stderr=True)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _coordinator(ctx: click.Context) -> ReplaceCoordinator:
    config = ctx.obj
    return ReplaceCoordinator(GoMod(config.go_binary), config)


def _fail(error: GomrError) -> None:
    """Print ``error`` and exit non-zero."""
    err_console.print(f"[red]error:[/] {escape(str(error))}", highlight=False, soft_wrap=True)
    if isinstance(error, ExternalToolError) and error.output.strip():
        err_console.print(
            error.output.rstrip(), markup=False, highlight=False, soft_wrap=True
        )
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log every go invocation and file change")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """gomr — manage replaces in Go modules.

    Point dependencies at local checkouts with 'gomr add', take every
    stored replace out of go.mod with 'gomr down' and put them back with
    'gomr up'.
    """
    config = load_config()
    _setup_logging("DEBUG" if verbose else config.log_level)
    ctx.obj = config


# ── Add / Remove ─────────────────────────────────────────────────────


@main.command()
@click.argument("package")
@click.argument("path", required=False)
@click.pass_context
def add(ctx: click.Context, package: str, path: str | None):
    """Add a replace line to the current module.

    PATH defaults to $GOPATH/src/PACKAGE. If PATH has no go.mod, a
    placeholder one is created and removed again by 'remove' or 'down'.
    """
    try:
        record = _coordinator(ctx).add(package, path)
    except GomrError as e:
        _fail(e)
        return

    console.print(f"added replace: {record.mapping}", highlight=False, soft_wrap=True)
    if record.synthetic:
        console.print(
            f"  [dim]created placeholder go.mod in {record.path}[/]",
            highlight=False,
            soft_wrap=True,
        )


@main.command()
@click.argument("package")
@click.pass_context
def remove(ctx: click.Context, package: str):
    """Remove a stored replace from the current module."""
    try:
        removed = _coordinator(ctx).remove(package)
    except GomrError as e:
        _fail(e)
        return

    if not removed:
        console.print(
            f"[yellow]could not find stored replace for module:[/] {package}",
            highlight=False,
            soft_wrap=True,
        )
        return

    for record in removed:
        console.print(f"deleted replace: {record.mapping}", highlight=False, soft_wrap=True)


# ── Up / Down ────────────────────────────────────────────────────────


@main.command()
@click.pass_context
def up(ctx: click.Context):
    """Add all stored replace lines to go.mod."""
    try:
        records = _coordinator(ctx).up()
    except GomrError as e:
        _fail(e)
        return

    if not records:
        console.print("[yellow]No stored replaces.[/]")
        return
    console.print(f"[green]replace lines installed[/] ({len(records)})")


@main.command()
@click.pass_context
def down(ctx: click.Context):
    """Remove all stored replace lines from go.mod."""
    try:
        records = _coordinator(ctx).down()
    except GomrError as e:
        _fail(e)
        return

    if not records:
        console.print("[yellow]No stored replaces.[/]")
        return
    console.print(f"[green]replace lines removed[/] ({len(records)})")


# ── List ─────────────────────────────────────────────────────────────


@main.command(name="list")
@click.pass_context
def list_records(ctx: click.Context):
    """List the replaces stored for the current module."""
    try:
        records = _coordinator(ctx).records()
    except GomrError as e:
        _fail(e)
        return

    if not records:
        console.print("[yellow]No stored replaces.[/]")
        return

    table = Table(title=f"Stored replaces ({len(records)})")
    table.add_column("Module", style="cyan", no_wrap=True)
    table.add_column("Path", overflow="fold")
    table.add_column("Placeholder", justify="center")

    for record in records:
        placeholder = "[green]Y[/]" if record.synthetic else "[dim]N[/]"
        table.add_row(record.name, record.path, placeholder)

    console.print(table)


if __name__ == "__main__":
    main()

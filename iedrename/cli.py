"""CLI entrypoints."""

import os
import shutil
import tempfile
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from iedrename.models.rename import ItemView
from iedrename.processors.live_search import LiveSearch
from iedrename.processors.scl_document import SCLDocument
from iedrename.processors.validation import ListValidationEngine
from iedrename.search import SearchQuery, compile_query


console = Console()

INTERACTIVE_HELP = """Commands:
  OLD=NEW         propose a new name for IED OLD
  /search TEXT    filter the list (quote terms to include spaces, * and ? glob)
  /clear          clear the search filter
  /show           show the list again
  /commit         apply the pending renames and save
  /quit           discard all edits and exit"""


def _save_inplace(temp_file: str, target_file: str) -> None:
    """Replace `target_file` with `temp_file`, keeping the target's permissions."""
    shutil.copymode(target_file, temp_file)
    shutil.move(temp_file, target_file)


def _resolve_output(output_file: str | None, inplace: bool) -> str | None:
    """Validate the OUTPUT_FILE / --inplace combination.

    Returns:
        The output path, or None when saving in place.
    """
    if output_file is None and not inplace:
        raise click.UsageError("Either OUTPUT_FILE must be provided or --inplace must be set.")
    if output_file is not None and inplace:
        raise click.UsageError("Cannot specify both OUTPUT_FILE and --inplace.")
    return output_file


def _save_document(document: SCLDocument, input_file: str, output_file: str | None) -> str:
    """Save the document to `output_file`, or over `input_file` when it is None."""
    if output_file is not None:
        document.save(output_file)
        return output_file

    fd, temp_path = tempfile.mkstemp(suffix=Path(input_file).suffix, dir=Path(input_file).parent)
    os.close(fd)
    try:
        document.save(temp_path)
        _save_inplace(temp_path, input_file)
    except BaseException:
        Path(temp_path).unlink(missing_ok=True)
        raise
    return input_file


def _parse_rename(value: str) -> tuple[str, str]:
    """Split an `OLD=NEW` rename argument."""
    old_name, separator, new_name = value.partition("=")
    if not separator or not old_name:
        raise click.BadParameter(f"Expected OLD=NEW, got '{value}'.", param_hint="'-r' / '--rename'")
    return old_name, new_name


def _open_session(input_file: str) -> tuple[SCLDocument, ListValidationEngine]:
    """Open an SCL file and load its IEDs into a new rename session."""
    engine = ListValidationEngine()
    try:
        document = SCLDocument.open(input_file)
        engine.load_session(document.records())
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise SystemExit(1) from e
    return document, engine


def _render_views(views: list[ItemView], query: SearchQuery | None = None) -> Table:
    """Build a table of session items for display."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Original", style="cyan")
    table.add_column("New Name")
    table.add_column("IED", style="dim")
    table.add_column("Details", style="dim")
    table.add_column("Status")

    for view in views:
        if not view.visible:
            continue

        name_style = "green" if view.is_dirty else "white"
        if view.is_valid:
            status = "[green]changed[/green]" if view.is_dirty else ""
        else:
            status = f"[red]{view.reason.message}[/red]"

        table.add_row(
            escape(view.identity),
            f"[{name_style}]{escape(view.current_value)}[/{name_style}]",
            escape(view.first_line),
            escape(view.second_line),
            status,
        )

    if query is not None and not query.matches_all:
        table.caption = f"Filter: {escape(query.raw)}"

    return table


def _apply_and_save(
    engine: ListValidationEngine,
    document: SCLDocument,
    input_file: str,
    output_file: str | None,
) -> None:
    """Commit the session, apply the renames to the document and save it."""
    ops = engine.commit()
    try:
        document.apply_renames(ops)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise SystemExit(1) from e
    engine.close()

    saved_to = _save_document(document, input_file, output_file)
    console.print(
        f"[bold green]Successfully renamed {len(ops)} IED(s).[/bold green] Saved to [bold cyan]{escape(saved_to)}[/bold cyan]."
    )


@click.group(context_settings=dict(show_default=True))
def cli() -> None:
    """iedrename - Batch rename IEDs in SCL files."""
    pass


@cli.command("list")
@click.argument("input_file", type=click.Path(exists=True))
@click.option(
    "-s",
    "--search",
    type=str,
    default="",
    help="Only show IEDs matching all search terms (quote terms to include spaces, * and ? glob).",
)
def list_ieds(input_file: str, search: str) -> None:
    """List the IEDs of an SCL file."""
    _, engine = _open_session(input_file)

    query = compile_query(search)
    views = engine.views(query)
    visible = sum(1 for view in views if view.visible)

    console.print(
        f"Found [bold cyan]{len(views)}[/bold cyan] IED(s) in [bold cyan]{escape(input_file)}[/bold cyan]."
    )
    if not query.matches_all:
        console.print(f"[cyan]{visible}[/cyan] match [italic]{escape(search)}[/italic].")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("IED")
    table.add_column("Details", style="dim")
    for view in views:
        if view.visible:
            table.add_row(escape(view.identity), escape(view.first_line), escape(view.second_line))

    console.print(table)


@cli.command("rename")
@click.argument("input_file", type=click.Path(exists=True))
@click.argument("output_file", type=click.Path(), required=False)
@click.option(
    "-r",
    "--rename",
    "renames",
    type=str,
    multiple=True,
    required=True,
    help="Rename instruction of the form OLD=NEW. May be given multiple times.",
)
@click.option("--inplace", is_flag=True, default=False, help="Modify the input file in place.")
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    default=False,
    help="Automatically apply renames without asking for confirmation.",
)
def rename(
    input_file: str,
    output_file: str | None,
    renames: tuple[str, ...],
    inplace: bool,
    yes: bool,
) -> None:
    """Rename one or more IEDs in an SCL file.

    All new names are validated together: names must start with a letter,
    contain only letters, digits and underscores, be at most 63 characters
    long and be unique across the file.

    Examples:

        iedrename rename station.scd -r IED1=P1_BAY1 -r IED2=P1_BAY2 renamed.scd

        iedrename rename station.scd -r OLD_NAME=NEW_NAME --inplace -y
    """
    output_file = _resolve_output(output_file, inplace)
    edits = [_parse_rename(value) for value in renames]

    document, engine = _open_session(input_file)

    for old_name, new_name in edits:
        try:
            engine.set_current_value(old_name, new_name)
        except ValueError as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            raise SystemExit(1) from e

    pending = set(engine.pending_renames)
    views = [view for view in engine.views() if view.identity in pending or not view.is_valid]

    console.print("[bold]Proposed renames:[/bold]")
    console.print(_render_views(views))
    console.print()

    if not engine.is_committable():
        if not engine.pending_renames:
            console.print("[yellow]No IED names changed. Nothing to rename.[/yellow]")
            return
        for view in views:
            if not view.is_valid:
                console.print(
                    f"[bold red]Error:[/bold red] [cyan]{escape(view.identity)}[/cyan] -> "
                    f"'{escape(view.current_value)}': {view.reason.message}"
                )
        raise SystemExit(1)

    if not yes and not click.confirm(f"Rename {len(pending)} IED(s)?", default=False):
        console.print("[yellow]Aborted. No IEDs were renamed.[/yellow]")
        engine.close()
        return

    _apply_and_save(engine, document, input_file, output_file)


@cli.command("interactive")
@click.argument("input_file", type=click.Path(exists=True))
@click.argument("output_file", type=click.Path(), required=False)
@click.option("--inplace", is_flag=True, default=False, help="Modify the input file in place.")
def interactive(input_file: str, output_file: str | None, inplace: bool) -> None:
    """Edit IED names interactively, then apply them all at once."""
    output_file = _resolve_output(output_file, inplace)

    document, engine = _open_session(input_file)
    search = LiveSearch(engine)

    console.print(INTERACTIVE_HELP)
    console.print(_render_views(engine.views(search.query), search.query))

    while True:
        command = click.prompt("rename", default="", show_default=False).strip()

        if command == "/quit":
            search.cancel()
            engine.close()
            console.print("[yellow]Closed. No IEDs were renamed.[/yellow]")
            return
        elif command == "/commit":
            if not engine.is_committable():
                console.print("[yellow]Nothing to commit: names must be changed and all valid.[/yellow]")
                continue
            _apply_and_save(engine, document, input_file, output_file)
            return
        elif command.startswith("/search"):
            search.apply(command[len("/search") :].strip())
        elif command == "/clear":
            search.clear()
        elif command == "/show" or command == "":
            pass
        elif "=" in command:
            old_name, _, new_name = command.partition("=")
            try:
                result = engine.set_current_value(old_name.strip(), new_name.strip())
            except ValueError as e:
                console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
                continue
            if not result.is_valid:
                console.print(f"[red]{result.reason.message}[/red]")
        else:
            console.print(INTERACTIVE_HELP)
            continue

        console.print(_render_views(engine.views(search.query), search.query))
        pending = len(engine.pending_renames)
        state = "[green]ready[/green]" if engine.is_committable() else "[yellow]not ready[/yellow]"
        console.print(f"Pending renames: [cyan]{pending}[/cyan] ({state})")

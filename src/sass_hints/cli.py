"""sass-hints command line.

Commands:
    symbols: list variables, mixins and functions visible to a stylesheet
    complete: run a completion query at a line/column of a stylesheet
"""

import asyncio
import logging

import typer
from rich.markup import escape
from rich.table import Table

from sass_hints.cli_utils import (
    EXIT_ERROR,
    _error,
    _load_store,
    _setup_logging,
    _validate_file,
    _warning,
    console,
)
from sass_hints.hints.controller import HintsController
from sass_hints.hints.provider import SassHintProvider
from sass_hints.host import InMemoryDocument, InMemoryEditor, Position
from sass_hints.index.builtins import builtin_description
from sass_hints.scanner.types import ORIGIN_BUILTIN, Symbol, SymbolKind

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="sass-hints",
    help="Scope-aware SCSS completion engine",
    no_args_is_help=True,
)


def _attach(file: str, config: str | None, max_hints: int | None = None) -> SassHintProvider:
    """Open a stylesheet, attach a provider and scan its imports."""
    file_path = _validate_file(file)
    store = _load_store(config, max_hints)
    if not store.current.enabled:
        _warning("Hints are disabled by configuration")
        raise typer.Exit(code=EXIT_ERROR)

    provider = SassHintProvider(store)
    editor = InMemoryEditor(InMemoryDocument.from_file(file_path))
    controller = HintsController(provider)
    if not asyncio.run(controller.on_active_editor_changed(editor)):
        _error(f"Unsupported file type: {file_path.suffix or '(none)'}")
        raise typer.Exit(code=EXIT_ERROR)
    return provider


def _symbol_table(title: str, symbols: list[Symbol], show_score: bool = False) -> Table:
    table = Table(title=title)
    table.add_column("", style="bold")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Detail")
    table.add_column("Origin", style="dim")
    if show_score:
        table.add_column("Score", style="dim", justify="right")
    for symbol in symbols:
        detail = escape(symbol.detail)
        if symbol.origin == ORIGIN_BUILTIN:
            description = builtin_description(symbol.name)
            detail = f"{detail}  [dim]{description}[/dim]" if description else detail
        row = [symbol.badge, symbol.name, detail, symbol.origin]
        if show_score:
            row.append(f"{symbol.match_score or 0:.1f}")
        table.add_row(*row)
    return table


@app.command("symbols")
def symbols_command(
    file: str = typer.Argument(..., help="Path to an .scss file"),
    kind: str | None = typer.Option(
        None,
        "--kind",
        "-k",
        help="Only list one kind: variable, mixin or function",
    ),
    config: str | None = typer.Option(None, "--config", "-c", help="YAML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Errors only"),
) -> None:
    """List the symbols a stylesheet can use, including imported ones."""
    _setup_logging(verbose, quiet)

    kinds = {
        "variable": SymbolKind.VARIABLE,
        "mixin": SymbolKind.MIXIN,
        "function": SymbolKind.FUNCTION,
    }
    if kind is not None and kind not in kinds:
        _error(f"Unknown kind '{kind}', expected one of: {', '.join(kinds)}")
        raise typer.Exit(code=EXIT_ERROR)

    provider = _attach(file, config)
    selected = [kinds[kind]] if kind else list(kinds.values())
    for symbol_kind in selected:
        found = provider.symbols(symbol_kind)
        console.print(_symbol_table(f"{symbol_kind.name.title()}s ({len(found)})", found))


@app.command("complete")
def complete_command(
    file: str = typer.Argument(..., help="Path to an .scss file"),
    line: int = typer.Option(..., "--line", "-l", help="0-based cursor line"),
    ch: int = typer.Option(..., "--ch", help="0-based cursor column"),
    trigger: str | None = typer.Option(
        None,
        "--trigger",
        "-t",
        help="Simulate typing this trigger character ($, @ or :) at the cursor",
    ),
    max_hints: int | None = typer.Option(None, "--max", "-m", help="Candidate cap"),
    config: str | None = typer.Option(None, "--config", "-c", help="YAML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Errors only"),
) -> None:
    """Show ranked completion candidates at a cursor position."""
    _setup_logging(verbose, quiet)
    provider = _attach(file, config, max_hints)
    editor = provider.editor
    assert isinstance(editor, InMemoryEditor)

    editor.cursor = Position(line, ch)
    if trigger is not None:
        editor.type_text(trigger)

    if not provider.has_hints(editor, trigger):
        console.print("No completion session at this position")
        return

    response = provider.get_hints(trigger)
    if response is not None and response.requery and provider.has_hints(editor, None):
        response = provider.get_hints(None)

    if response is None or not response.candidates:
        console.print("No candidates")
        return

    mode = provider.session.mode.value
    console.print(
        _symbol_table(f"{mode} candidates ({len(response.candidates)})", response.candidates, True)
    )

"""Shared CLI utilities for sass-hints.

This module contains exit codes, the console singleton, and helper
functions used by the command module.
"""

import logging
import os
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from sass_hints.core.config import ConfigStore, HintsConfig, load_config
from sass_hints.core.exceptions import ConfigError

# Exit codes following Unix conventions
EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1  # General error (file not found, etc.)
EXIT_CONFIG_ERROR: int = 2  # Configuration/usage error

# When stdout is piped, Rich strips ANSI codes
_is_tty = sys.stdout.isatty()

console = Console(force_terminal=_is_tty, no_color=not _is_tty)

logger = logging.getLogger(__name__)


def _error(message: str) -> None:
    """Display error message with red styling."""
    console.print(f"[red]Error:[/red] {message}")


def _warning(message: str) -> None:
    """Display warning message with yellow styling."""
    console.print(f"[yellow]Warning:[/yellow] {message}")


def _setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure logging based on verbosity flags.

    Args:
        verbose: If True, set DEBUG level.
        quiet: If True, set ERROR level.

    Note:
        verbose takes precedence over quiet. Default level is WARNING so
        unresolved imports are reported. SASS_HINTS_LOG_LEVEL overrides both.

    """
    env_level = os.environ.get("SASS_HINTS_LOG_LEVEL", "").upper()
    if env_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        level = getattr(logging, env_level)
    elif verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.root.handlers.clear()

    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setLevel(level)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )


def _validate_file(path: str) -> Path:
    """Resolve a stylesheet path given on the command line.

    Raises:
        typer.Exit: If the path doesn't exist or isn't a file.

    """
    file_path = Path(path).resolve()
    if not file_path.exists():
        _error(f"File not found: {path}")
        raise typer.Exit(code=EXIT_ERROR)
    if not file_path.is_file():
        _error(f"Path must be a file: {path}")
        raise typer.Exit(code=EXIT_ERROR)
    return file_path


def _load_store(config_path: str | None, max_hints: int | None = None) -> ConfigStore:
    """Build a ConfigStore from an optional YAML file and CLI overrides.

    Raises:
        typer.Exit: If the configuration cannot be loaded.

    """
    try:
        config = load_config(Path(config_path)) if config_path else HintsConfig()
        store = ConfigStore(config)
        if max_hints is not None:
            store.update(max_hints=max_hints)
    except ConfigError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None
    return store

"""Built-in Sass function table.

Loads data/builtin_functions.yaml once per process and exposes one
function Symbol per documented call signature.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from sass_hints.scanner.types import ORIGIN_BUILTIN, ORIGIN_KEYWORD, Symbol, SymbolKind

logger = logging.getLogger(__name__)

_DATA_FILE = Path(__file__).parent / "data" / "builtin_functions.yaml"

KEYWORDS: tuple[str, ...] = (
    "import",
    "mixin",
    "extend",
    "function",
    "include",
    "media",
    "if",
    "return",
    "for",
    "each",
    "else",
    "while",
)


@lru_cache(maxsize=1)
def _load_table() -> dict[str, Any]:
    """Load and cache the built-in function YAML (once per process)."""
    try:
        with _DATA_FILE.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            logger.warning("builtin_functions.yaml root is not a dict, using empty")
            return {}
        return data
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Cannot load builtin_functions.yaml: %s", e)
        return {}


def builtin_functions() -> list[Symbol]:
    """Return fresh Symbols for every built-in function signature.

    Returns:
        One function Symbol per (name, signature), origin ``sass``.

    """
    symbols: list[Symbol] = []
    for name, entry in _load_table().items():
        if not isinstance(entry, dict):
            logger.debug("Skipping malformed built-in entry %r", name)
            continue
        for arguments in entry.get("arguments", []):
            symbols.append(
                Symbol(
                    name=str(name),
                    kind=SymbolKind.FUNCTION,
                    detail=f"({arguments})",
                    origin=ORIGIN_BUILTIN,
                )
            )
    return symbols


def builtin_description(name: str) -> str:
    """Return the one-line description of a built-in function, or ''."""
    entry = _load_table().get(name)
    if isinstance(entry, dict):
        return str(entry.get("description", ""))
    return ""


def keyword_symbols() -> list[Symbol]:
    """Return Symbols for the directive keywords offered after ``@``."""
    return [Symbol(name=key, kind=SymbolKind.KEYWORD, origin=ORIGIN_KEYWORD) for key in KEYWORDS]

"""Pattern-based declaration extraction for variables, mixins and functions.

Extractors operate on comment-stripped text. Mixin and function extractors
can run in strip mode: every matched definition, signature through matching
closing brace, is cut from the working text, so a later variable pass over
the remainder only sees top-level declarations.
"""

from __future__ import annotations

import logging
import re

from sass_hints.scanner.brackets import block_end
from sass_hints.scanner.patterns import (
    BLOCK_PATTERN,
    FUNCTION_PATTERN,
    MIXIN_PATTERN,
    VARIABLE_PATTERN,
    first_match,
    scan,
)
from sass_hints.scanner.types import (
    ORIGIN_GLOBAL,
    ExtractionResult,
    Priority,
    Symbol,
    SymbolKind,
)

logger = logging.getLogger(__name__)


def extract_variable_map(
    text: str,
    origin: str = ORIGIN_GLOBAL,
    priority: Priority = Priority.LOW,
) -> dict[tuple[str, str], Symbol]:
    """Extract variables keyed by (name, origin).

    A variable assigned more than once keeps a single entry whose detail
    is the last assigned value.

    Args:
        text: Comment-stripped text.
        origin: Origin tag for every symbol.
        priority: Priority for every symbol.

    Returns:
        Insertion-ordered mapping of (name, origin) to Symbol.

    """
    result: dict[tuple[str, str], Symbol] = {}
    for match in scan(VARIABLE_PATTERN, text):
        name = match.groups[0] or ""
        value = (match.groups[1] or "").strip()
        key = (name, origin)
        existing = result.get(key)
        if existing is not None:
            existing.detail = value
        else:
            result[key] = Symbol(
                name=name,
                kind=SymbolKind.VARIABLE,
                detail=value,
                origin=origin,
                priority=priority,
            )
    return result


def extract_variables(
    text: str,
    origin: str = ORIGIN_GLOBAL,
    priority: Priority = Priority.LOW,
) -> list[Symbol]:
    """Extract unique variable declarations from text.

    Args:
        text: Comment-stripped text.
        origin: Origin tag for every symbol.
        priority: Priority for every symbol.

    Returns:
        One Symbol per variable name, in first-declaration order.

    """
    return list(extract_variable_map(text, origin, priority).values())


def _extract_blocks(
    pattern: re.Pattern[str],
    kind: SymbolKind,
    text: str,
    origin: str,
    strip: bool,
) -> ExtractionResult:
    symbols: list[Symbol] = []
    position = 0

    while (match := first_match(pattern, text, position)) is not None:
        name = match.groups[0] or ""
        params = match.groups[1]
        symbol = Symbol(name=name, kind=kind, origin=origin)
        if params is not None:
            symbol.set_params(params)
        symbols.append(symbol)

        if strip:
            end = block_end(text, match.offset)
            text = text[: match.offset] + text[end:]
            # Whatever followed the block now starts where the block did
            position = match.offset
        else:
            position = match.end

    return ExtractionResult(symbols=symbols, remaining=text)


def extract_mixins(
    text: str,
    origin: str = ORIGIN_GLOBAL,
    strip: bool = False,
) -> ExtractionResult:
    """Extract ``@mixin`` declarations.

    Args:
        text: Comment-stripped text.
        origin: Origin tag for every symbol.
        strip: Cut each matched mixin block from the returned text.

    Returns:
        ExtractionResult with mixin symbols in text order.

    """
    return _extract_blocks(MIXIN_PATTERN, SymbolKind.MIXIN, text, origin, strip)


def extract_functions(
    text: str,
    origin: str = ORIGIN_GLOBAL,
    strip: bool = False,
) -> ExtractionResult:
    """Extract ``@function`` declarations.

    Args:
        text: Comment-stripped text.
        origin: Origin tag for every symbol.
        strip: Cut each matched function block from the returned text.

    Returns:
        ExtractionResult with function symbols in text order.

    """
    return _extract_blocks(FUNCTION_PATTERN, SymbolKind.FUNCTION, text, origin, strip)


def clear_blocks(text: str) -> str:
    """Remove every mixin and function definition from text."""
    position = 0
    while (match := first_match(BLOCK_PATTERN, text, position)) is not None:
        end = block_end(text, match.offset)
        text = text[: match.offset] + text[end:]
        position = match.offset
    return text


def extract_file_symbols(
    text: str,
    origin: str,
) -> tuple[list[Symbol], list[Symbol], list[Symbol]]:
    """Extract top-level functions, mixins and variables of a whole file.

    Functions are cut first, then mixins from the remainder, then variables
    are read from what is left, so assignments inside bodies never appear
    as file-level variables.

    Args:
        text: Comment-stripped file text.
        origin: Origin tag (usually the import file name).

    Returns:
        Tuple of (variables, mixins, functions).

    """
    functions = extract_functions(text, origin, strip=True)
    mixins = extract_mixins(functions.remaining, origin, strip=True)
    variables = extract_variables(mixins.remaining, origin)
    logger.debug(
        "Extracted from %s: %d variables, %d mixins, %d functions",
        origin,
        len(variables),
        len(mixins.symbols),
        len(functions.symbols),
    )
    return variables, mixins.symbols, functions.symbols

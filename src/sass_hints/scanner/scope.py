"""Block index, scope lookup and local-scope resolution.

Variable completion distinguishes three scopes:
- locals: parameters and assignments of the mixin/function enclosing the cursor
- globals: top-level assignments of the document (all block bodies removed)
- imported: supplied separately by the import cache

The cursor position is unified with scan offsets through a flattened text:
the comment-stripped text before the cursor followed by the comment-stripped
text after it. The cursor's flattened offset is the length of the first part.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sass_hints.scanner.brackets import block_end
from sass_hints.scanner.comments import strip_comments
from sass_hints.scanner.extractors import extract_variable_map, extract_variables
from sass_hints.scanner.patterns import BLOCK_PATTERN, PARAMETER_PATTERN, scan
from sass_hints.scanner.types import (
    ORIGIN_GLOBAL,
    ORIGIN_LOCAL,
    BlockSpan,
    Priority,
    Symbol,
    SymbolKind,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FlattenedText:
    """Comment-stripped text with the cursor expressed as a single offset."""

    text: str
    cursor: int


@dataclass
class VariableScope:
    """Variables visible at a cursor position within one document.

    Attributes:
        locals: Parameters and in-block assignments of the enclosing block.
        globals: Top-level assignments of the document.
        block: Enclosing block, or None when the cursor is at top level.

    """

    locals: list[Symbol] = field(default_factory=list)
    globals: list[Symbol] = field(default_factory=list)
    block: BlockSpan | None = None


def flatten(before_cursor: str, after_cursor: str) -> FlattenedText:
    """Build the flattened text for a cursor split.

    Args:
        before_cursor: Document text from its start up to the cursor.
        after_cursor: Document text from the cursor to the end of the
            scanned region (typically the last visible line).

    Returns:
        FlattenedText whose cursor is the length of the stripped prefix.

    """
    head = strip_comments(before_cursor, preserve_lines=True)
    tail = strip_comments(after_cursor, preserve_lines=True)
    return FlattenedText(text=head + tail, cursor=len(head))


def build_index(text: str) -> tuple[BlockSpan, ...]:
    """Index top-level mixin and function definitions.

    Definitions nested inside an already indexed block are skipped, so the
    result is sorted by ``start`` and non-overlapping. A block without a
    matching close brace extends to the end of the text.

    Args:
        text: Comment-stripped (flattened) text.

    Returns:
        Immutable tuple of spans in text order.

    """
    spans: list[BlockSpan] = []
    covered_until = 0
    for match in scan(BLOCK_PATTERN, text):
        if match.offset < covered_until:
            continue
        end = block_end(text, match.offset)
        spans.append(BlockSpan(head=match.offset, start=match.end, end=end))
        covered_until = end
    return tuple(spans)


def locate(index: tuple[BlockSpan, ...] | list[BlockSpan], offset: int) -> int | None:
    """Binary-search the span whose body contains offset.

    Args:
        index: Spans sorted by start and non-overlapping.
        offset: Flattened cursor offset.

    Returns:
        Index of the span with ``start <= offset <= end``, or None.

    """
    left, right = 0, len(index) - 1
    while left <= right:
        middle = (left + right) // 2
        span = index[middle]
        if span.contains(offset):
            return middle
        if span.start < offset:
            left = middle + 1
        else:
            right = middle - 1
    return None


def remove_spans(text: str, index: tuple[BlockSpan, ...] | list[BlockSpan]) -> str:
    """Return text with every span's head..end region cut out."""
    parts: list[str] = []
    position = 0
    for span in index:
        parts.append(text[position : span.head])
        position = span.end
    parts.append(text[position:])
    return "".join(parts)


def resolve_locals(block_text: str, signature_length: int) -> list[Symbol]:
    """Collect parameters and variables of one mixin/function block.

    Parameters become high-priority local variables. Variables assigned in
    the block become medium-priority locals; when one of them reassigns a
    parameter, the parameter keeps its priority but takes the assigned value
    and the duplicate is dropped.

    Args:
        block_text: Block text from ``@mixin``/``@function`` through the
            closing brace.
        signature_length: Length of the signature (``start - head``).

    Returns:
        Local symbols, unique by name. Order is not significant.

    """
    signature = block_text[:signature_length]
    params: dict[str, Symbol] = {}
    for match in scan(PARAMETER_PATTERN, signature):
        name = match.groups[0] or ""
        params[name] = Symbol(
            name=name,
            kind=SymbolKind.VARIABLE,
            detail=match.groups[1] or "",
            origin=ORIGIN_LOCAL,
            priority=Priority.HIGH,
            is_parameter=True,
        )

    variables = extract_variable_map(block_text, ORIGIN_LOCAL, Priority.MEDIUM)
    merged: dict[str, Symbol] = {name: symbol for (name, _origin), symbol in variables.items()}
    for name, param in params.items():
        body_symbol = merged.pop(name, None)
        if body_symbol is not None:
            param.detail = body_symbol.detail
        merged[name] = param
    return list(merged.values())


def variable_scope(flat: FlattenedText) -> VariableScope:
    """Compute local and document-global variables at the flattened cursor.

    Args:
        flat: Flattened text and cursor offset.

    Returns:
        VariableScope for the cursor.

    """
    index = build_index(flat.text)
    position = locate(index, flat.cursor)

    scope = VariableScope()
    if position is not None:
        block = index[position]
        scope.block = block
        scope.locals = resolve_locals(
            flat.text[block.head : block.end],
            block.start - block.head,
        )

    scope.globals = extract_variables(remove_spans(flat.text, index), ORIGIN_GLOBAL)
    logger.debug(
        "Variable scope: %d blocks, in_block=%s, locals=%d, globals=%d",
        len(index),
        position is not None,
        len(scope.locals),
        len(scope.globals),
    )
    return scope


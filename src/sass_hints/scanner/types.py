"""Core data types for the scanning pipeline.

Defines Symbol, BlockSpan, ScanMatch and ExtractionResult as the
intermediate representations shared by the extractors, the scope
locator, the import cache and the ranker.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

# Origin tags used for symbols that do not come from an imported file
ORIGIN_GLOBAL = "global"
ORIGIN_LOCAL = "local"
ORIGIN_KEYWORD = "keyword"
ORIGIN_BUILTIN = "sass"


class SymbolKind(Enum):
    """Kind of declared entity."""

    VARIABLE = "V"
    MIXIN = "M"
    FUNCTION = "F"
    KEYWORD = "K"


class Priority(IntEnum):
    """Display ordering weight; higher sorts first among equal matches."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2


@dataclass(slots=True)
class Symbol:
    """One declared entity offered as a completion candidate.

    ``detail`` is mutable: a later redefinition of a variable with the same
    name and origin overwrites it. ``match_score`` and ``match_ranges`` are
    only set on the copies returned by the ranker.

    Attributes:
        name: Identifier text without sigil (``primary`` for ``$primary``).
        kind: Symbol kind.
        detail: Value or parenthesised parameter list.
        origin: ``global``, ``local``, an import file name or ``sass``.
        priority: Ordering weight.
        is_parameter: True for mixin/function parameters.
        match_score: Match quality, higher is better.
        match_ranges: Half-open (start, end) ranges of ``name`` that matched.

    """

    name: str
    kind: SymbolKind
    detail: str = ""
    origin: str = ORIGIN_GLOBAL
    priority: Priority = Priority.LOW
    is_parameter: bool = False
    match_score: float | None = field(default=None, compare=False)
    match_ranges: tuple[tuple[int, int], ...] = field(default=(), compare=False)

    @property
    def key(self) -> tuple[str, str]:
        """Deduplication key: at most one symbol per (name, origin) per pass."""
        return (self.name, self.origin)

    @property
    def badge(self) -> str:
        """One-letter type marker for display."""
        if self.is_parameter:
            return "P"
        return self.kind.value

    @property
    def label(self) -> str:
        """Name followed by detail, as shown in a candidate list."""
        if self.kind is SymbolKind.VARIABLE and self.detail:
            return f"{self.name}: {self.detail}"
        return f"{self.name}{self.detail}"

    def set_params(self, params: str) -> None:
        """Record a mixin or function parameter list as detail."""
        self.detail = f"({params.strip()})"


@dataclass(frozen=True, slots=True)
class BlockSpan:
    """Flattened-offset extent of a top-level mixin or function definition.

    Attributes:
        head: Offset where the ``@mixin``/``@function`` keyword starts.
        start: Offset just past the opening brace of the body.
        end: Offset just past the matching closing brace.

    """

    head: int
    start: int
    end: int

    def contains(self, offset: int) -> bool:
        """Return True if offset lies within the body (inclusive bounds)."""
        return self.start <= offset <= self.end


@dataclass(frozen=True, slots=True)
class ScanMatch:
    """One pattern hit over an immutable text.

    Attributes:
        text: Full matched text.
        groups: Captured groups (None for groups that did not participate).
        offset: Start offset of the match.

    """

    text: str
    groups: tuple[str | None, ...]
    offset: int

    @property
    def end(self) -> int:
        """Offset just past the match."""
        return self.offset + len(self.text)


@dataclass
class ExtractionResult:
    """Symbols found by one extractor pass plus the remaining text.

    ``remaining`` equals the input text unless the pass ran in strip mode,
    in which case every matched block was excised from it.

    """

    symbols: list[Symbol] = field(default_factory=list)
    remaining: str = ""

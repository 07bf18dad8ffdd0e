"""Hint session state: mode, anchor and trigger detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from sass_hints.host import Position
from sass_hints.scanner.patterns import TOKEN_PATTERN


class HintMode(Enum):
    """What kind of symbol the current session completes."""

    NONE = "none"
    VARIABLE = "variable"
    FUNCTION = "function"
    KEYWORD = "keyword"
    MIXIN = "mixin"


# Characters whose typing starts a session
TRIGGERS: dict[str, HintMode] = {
    "$": HintMode.VARIABLE,
    "@": HintMode.KEYWORD,
    ":": HintMode.FUNCTION,
}

INCLUDE_DIRECTIVE = "@include"
INCLUDE_KEYWORD = "include"


@dataclass(frozen=True, slots=True)
class ExplicitToken:
    """Result of inspecting the text before the cursor on explicit invocation.

    Attributes:
        mode: Mode to enter.
        backoff: Characters between the anchor and the cursor.

    """

    mode: HintMode
    backoff: int


def detect_explicit(line_prefix: str) -> ExplicitToken | None:
    """Find an unfinished ``[$@:]word`` token at the end of a line prefix.

    A token followed by a partially typed second word completes that word:
    mixins after ``@include``, functions otherwise. A lone token completes
    according to its trigger character.

    Args:
        line_prefix: Text from the start of the cursor line to the cursor.

    Returns:
        ExplicitToken, or None when no token precedes the cursor.

    """
    match = TOKEN_PATTERN.search(line_prefix)
    if match is None:
        return None

    directive, continuation = match.group(1), match.group(2)
    if continuation:
        mode = HintMode.MIXIN if directive == INCLUDE_DIRECTIVE else HintMode.FUNCTION
        return ExplicitToken(mode=mode, backoff=len(continuation))

    return ExplicitToken(mode=TRIGGERS[directive[0]], backoff=len(match.group(0)) - 1)


@dataclass
class HintSession:
    """State of the completion interaction in progress.

    Attributes:
        mode: Active mode; NONE when no session is open.
        anchor: Position where the completed token starts.
        pending_continuation: A selection asked to keep the session open;
            the next explicit invocation resumes in the current mode.

    """

    mode: HintMode = HintMode.NONE
    anchor: Position = field(default_factory=lambda: Position(0, 0))
    pending_continuation: bool = False

    @property
    def active(self) -> bool:
        """True while a session is open."""
        return self.mode is not HintMode.NONE

    def start(self, mode: HintMode, anchor: Position) -> None:
        """Open a session in mode anchored at anchor."""
        self.mode = mode
        self.anchor = anchor
        self.pending_continuation = False

    def switch(self, mode: HintMode) -> None:
        """Change mode and ask the caller to re-issue the query."""
        self.mode = mode
        self.pending_continuation = True

    def advance_anchor(self, chars: int = 1) -> None:
        """Move the anchor right on its line."""
        self.anchor = Position(self.anchor.line, (self.anchor.ch or 0) + chars)

    def reset(self) -> None:
        """Close the session."""
        self.mode = HintMode.NONE
        self.pending_continuation = False

    def is_stale(self, cursor: Position) -> bool:
        """Return True if the cursor moved before the anchor."""
        if cursor.line < self.anchor.line:
            return True
        if cursor.line == self.anchor.line:
            return (cursor.ch or 0) < (self.anchor.ch or 0)
        return False

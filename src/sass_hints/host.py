"""Interfaces to the host editor and the file layer, plus local implementations.

The engine only talks to these protocols. ``InMemoryDocument`` and
``InMemoryEditor`` back the CLI and the tests; ``LocalFileSystem`` resolves
imports on disk.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Position:
    """Cursor position. ``ch=None`` means the end of the line."""

    line: int
    ch: int | None = 0


class Document(Protocol):
    """A document open in the host."""

    @property
    def path(self) -> Path | None:
        """File backing the document, if any."""
        ...

    @property
    def language_id(self) -> str:
        """Language identifier used to gate activation."""
        ...

    def get_text(self) -> str:
        """Return the full document text."""
        ...


class Editor(Protocol):
    """An editor view over a document."""

    @property
    def document(self) -> Document:
        """The edited document."""
        ...

    def get_cursor(self) -> Position:
        """Return the current cursor position."""
        ...

    def get_range(self, start: Position, end: Position) -> str:
        """Return document text between two positions."""
        ...

    def replace_range(self, text: str, start: Position, end: Position) -> None:
        """Replace document text between two positions."""
        ...

    def last_visible_line(self) -> int:
        """Return the index of the last line visible in the viewport."""
        ...


class FileSystem(Protocol):
    """File layer used to resolve and read imports."""

    def resolve(self, path: Path) -> Path | None:
        """Return a handle for path, or None if it does not exist."""
        ...

    async def fetch_text(self, handle: Path) -> str:
        """Read the text of a resolved file. May raise OSError."""
        ...


class InMemoryDocument:
    """Mutable text document held in memory."""

    def __init__(  # noqa: D107
        self,
        text: str = "",
        path: Path | None = None,
        language_id: str = "scss",
    ) -> None:
        self.text = text
        self._path = path
        self._language_id = language_id

    @classmethod
    def from_file(cls, path: Path) -> InMemoryDocument:
        """Load a document from disk; the language id is the file suffix."""
        return cls(
            path.read_text(encoding="utf-8"),
            path=path,
            language_id=path.suffix.lstrip(".").lower(),
        )

    @property
    def path(self) -> Path | None:
        """File backing the document, if any."""
        return self._path

    @property
    def language_id(self) -> str:
        """Language identifier."""
        return self._language_id

    def get_text(self) -> str:
        """Return the full document text."""
        return self.text


class InMemoryEditor:
    """Editor over an InMemoryDocument with a movable cursor.

    Positions are clamped to the document: lines past the end map to the
    last line and columns past the end of a line map to its end.

    """

    def __init__(  # noqa: D107
        self,
        document: InMemoryDocument,
        cursor: Position | None = None,
        visible_lines: int | None = None,
    ) -> None:
        self._document = document
        self.cursor = cursor or Position(0, 0)
        self.visible_lines = visible_lines

    @property
    def document(self) -> InMemoryDocument:
        """The edited document."""
        return self._document

    def get_cursor(self) -> Position:
        """Return the current cursor position."""
        return self.cursor

    def set_cursor(self, line: int, ch: int) -> None:
        """Move the cursor."""
        self.cursor = Position(line, ch)

    def _offset(self, position: Position) -> int:
        lines = self._document.text.split("\n")
        line = min(max(position.line, 0), len(lines) - 1)
        offset = sum(len(text) + 1 for text in lines[:line])
        length = len(lines[line])
        ch = length if position.ch is None else min(max(position.ch, 0), length)
        return offset + ch

    def _position(self, offset: int) -> Position:
        before = self._document.text[:offset]
        line = before.count("\n")
        return Position(line, offset - (before.rfind("\n") + 1))

    def get_range(self, start: Position, end: Position) -> str:
        """Return document text between two positions."""
        return self._document.text[self._offset(start) : self._offset(end)]

    def replace_range(self, text: str, start: Position, end: Position) -> None:
        """Replace text between two positions and move the cursor after it."""
        begin, finish = self._offset(start), self._offset(end)
        source = self._document.text
        self._document.text = source[:begin] + text + source[finish:]
        self.cursor = self._position(begin + len(text))

    def type_text(self, text: str) -> None:
        """Insert text at the cursor, as if typed."""
        self.replace_range(text, self.cursor, self.cursor)

    def last_visible_line(self) -> int:
        """Return the last visible line (the last line when unlimited)."""
        last = self._document.text.count("\n")
        if self.visible_lines is None:
            return last
        return min(last, self.visible_lines - 1)


class LocalFileSystem:
    """Resolve and read imports from the local disk."""

    def resolve(self, path: Path) -> Path | None:
        """Return path if it names an existing file, else None."""
        try:
            return path if path.is_file() else None
        except OSError as e:
            logger.debug("Cannot stat %s: %s", path, e)
            return None

    async def fetch_text(self, handle: Path) -> str:
        """Read a file's text without blocking the event loop."""
        return await asyncio.to_thread(handle.read_text, encoding="utf-8")

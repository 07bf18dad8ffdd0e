"""Shared fixtures for sass-hints tests.

- `MemoryFileSystem` - FileSystem backed by a dict, with optional read
  failures and per-file gates for ordering concurrent rescans
- `make_editor` - builds an InMemoryEditor over a document text
"""

import asyncio
from collections.abc import Callable
from pathlib import Path

import pytest

from sass_hints.host import InMemoryDocument, InMemoryEditor, Position

PROJECT_DIR = Path("/proj")


class MemoryFileSystem:
    """In-memory FileSystem for import resolution tests."""

    def __init__(self, files: dict[str, str] | None = None) -> None:  # noqa: D107
        self.files: dict[Path, str] = {Path(k): v for k, v in (files or {}).items()}
        self.failing: set[Path] = set()
        self.gates: dict[Path, asyncio.Event] = {}
        self.fetched: list[Path] = []

    def resolve(self, path: Path) -> Path | None:
        return path if path in self.files else None

    async def fetch_text(self, handle: Path) -> str:
        self.fetched.append(handle)
        gate = self.gates.get(handle)
        if gate is not None:
            await gate.wait()
        if handle in self.failing:
            raise OSError(f"permission denied: {handle}")
        return self.files[handle]


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """Project with one variables partial and one mixins file."""
    return MemoryFileSystem(
        {
            "/proj/_vars.scss": "$primary: #333;\n$gutter: 8px;\n",
            "/proj/mixins.scss": (
                "@mixin clearfix { &:after { clear: both; } }\n"
                "@function rem($px) { $base: 16; @return $px / $base; }\n"
                "$radius: 4px;\n"
            ),
        }
    )


@pytest.fixture
def make_editor() -> Callable[..., InMemoryEditor]:
    """Factory: make_editor(text, line=0, ch=0, path=None)."""

    def _make(
        text: str,
        line: int = 0,
        ch: int = 0,
        path: Path | None = None,
        language_id: str = "scss",
    ) -> InMemoryEditor:
        document = InMemoryDocument(text, path=path, language_id=language_id)
        return InMemoryEditor(document, cursor=Position(line, ch))

    return _make

"""Completion provider exposed to the host editor.

The host calls ``has_hints`` when a character is typed (or hints are
explicitly requested) outside an open session, ``get_hints`` on every
keystroke while a session is open, and ``insert_hint`` when a candidate is
selected.

Candidate pools per mode:
- VARIABLE: imported variables + locals of the enclosing block + document globals
- MIXIN: imported mixins + mixins declared in the document
- FUNCTION: imported and built-in functions + functions declared in the document
- KEYWORD: the directive keyword table
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sass_hints.core.config import ConfigStore, HintsConfig
from sass_hints.host import Editor, FileSystem, LocalFileSystem, Position
from sass_hints.index.builtins import keyword_symbols
from sass_hints.index.cache import ImportCacheBuilder, SymbolCache
from sass_hints.hints.matcher import rank
from sass_hints.hints.session import (
    INCLUDE_KEYWORD,
    TRIGGERS,
    HintMode,
    HintSession,
    detect_explicit,
)
from sass_hints.scanner.comments import strip_comments
from sass_hints.scanner.extractors import (
    clear_blocks,
    extract_functions,
    extract_mixins,
    extract_variables,
)
from sass_hints.scanner.scope import flatten, variable_scope
from sass_hints.scanner.types import ORIGIN_BUILTIN, Symbol, SymbolKind

logger = logging.getLogger(__name__)


@dataclass
class HintResponse:
    """Result of one query.

    Attributes:
        candidates: Ranked candidates, capped at ``max_hints``.
        anchor: Start of the text a selection replaces.
        select_first_by_default: Whether the host should preselect the first item.
        requery: The session changed mode; the host should issue a new
            explicit request instead of displaying these (empty) candidates.

    """

    candidates: list[Symbol] = field(default_factory=list)
    anchor: Position = field(default_factory=lambda: Position(0, 0))
    select_first_by_default: bool = True
    requery: bool = False


class SassHintProvider:
    """Owns the caches, the session and the configuration snapshot source.

    Args:
        config: Live configuration. A default store is created if omitted.
        fs: File layer for import resolution. Defaults to the local disk.

    """

    def __init__(  # noqa: D107
        self,
        config: ConfigStore | None = None,
        fs: FileSystem | None = None,
    ) -> None:
        self.config = config or ConfigStore()
        self.cache = SymbolCache()
        self.builder = ImportCacheBuilder(self.cache, fs or LocalFileSystem(), self.config)
        self.session = HintSession()
        self.editor: Editor | None = None
        self.keywords = keyword_symbols()

        self._pool: list[Symbol] = []
        self._pool_key: tuple[HintMode, int, int] | None = None
        self.config.subscribe(self._on_config_changed)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def set_editor(self, editor: Editor) -> None:
        """Make editor the target of subsequent operations."""
        self.editor = editor
        self._pool_key = None

    def clear_cache(self) -> None:
        """Drop the session, the candidate pool and every import cache."""
        self.session.reset()
        self.builder.reset()
        self._pool = []
        self._pool_key = None

    async def activate(self) -> None:
        """Scan the current document's imports and load built-ins."""
        if self.editor is None:
            return
        await self.builder.rescan(self.editor.document)
        self.builder.ensure_builtins()

    def _on_config_changed(self, old: HintsConfig, new: HintsConfig) -> None:
        if old.show_builtin_functions != new.show_builtin_functions:
            if new.show_builtin_functions:
                if not any(s.origin == ORIGIN_BUILTIN for s in self.cache.functions):
                    self.cache.add_builtins()
            else:
                self.cache.functions = [
                    s for s in self.cache.functions if s.origin != ORIGIN_BUILTIN
                ]
                self.cache.revision += 1
        if old.common_library_path != new.common_library_path:
            # Imports that failed to resolve may resolve now; rebuild on next rescan
            self.builder.invalidate()
        if not new.enabled:
            self.session.reset()
        self._pool_key = None

    # ------------------------------------------------------------------
    # Host API
    # ------------------------------------------------------------------

    def has_hints(self, editor: Editor, implicit_char: str | None) -> bool:
        """Decide whether a session starts for this keystroke or request.

        Args:
            editor: Editor the request comes from.
            implicit_char: Character just typed, or None for an explicit
                request.

        Returns:
            True if a session is open and get_hints should be called.

        """
        if not self.config.current.enabled:
            return False

        if editor is not self.editor:
            self.editor = editor
            self._pool_key = None
        cursor = editor.get_cursor()

        if implicit_char is None:
            if self.session.active and self.session.pending_continuation:
                self._update_pool(cursor, self.session.mode, force=True)
                self.session.start(self.session.mode, cursor)
                return True

            line_prefix = editor.get_range(Position(cursor.line, 0), cursor)
            token = detect_explicit(line_prefix)
            if token is None:
                self.session.reset()
                return False

            self._update_pool(cursor, token.mode)
            self.session.start(token.mode, Position(cursor.line, (cursor.ch or 0) - token.backoff))
            return True

        mode = TRIGGERS.get(implicit_char)
        if mode is not None:
            self._update_pool(cursor, mode)
            self.session.start(mode, cursor)
            return True

        self.session.reset()
        return False

    def get_hints(self, implicit_char: str | None = None) -> HintResponse | None:
        """Return ranked candidates for the token between anchor and cursor.

        Args:
            implicit_char: Character just typed, or None.

        Returns:
            HintResponse, or None if no session is open or the cursor moved
            before the anchor (which closes the session).

        """
        if self.editor is None or not self.session.active:
            return None

        cursor = self.editor.get_cursor()
        if self.session.is_stale(cursor):
            logger.debug("Cursor moved before anchor %s, closing session", self.session.anchor)
            self.session.reset()
            return None

        token: str | None = self.editor.get_range(self.session.anchor, cursor)
        mode = self.session.mode

        if mode is HintMode.KEYWORD:
            if token == f"{INCLUDE_KEYWORD} ":
                self.session.switch(HintMode.MIXIN)
                return HintResponse(anchor=self.session.anchor, requery=True)
            pool = self.keywords
        else:
            if mode in (HintMode.MIXIN, HintMode.FUNCTION) and implicit_char == " ":
                token = None
                self.session.advance_anchor()
            pool = self._pool

        candidates = rank(pool, token, self.config.current.max_hints)
        return HintResponse(candidates=candidates, anchor=self.session.anchor)

    def insert_hint(self, candidate: Symbol) -> bool:
        """Replace the text between anchor and cursor with a candidate name.

        Selecting ``include`` in keyword mode inserts ``include `` and keeps
        the session open in mixin mode.

        Returns:
            True if the host should immediately request hints again.

        """
        if self.editor is None:
            return False

        anchor = self.session.anchor
        cursor = self.editor.get_cursor()
        text = candidate.name
        keep_open = False

        if self.session.mode is HintMode.KEYWORD and candidate.name == INCLUDE_KEYWORD:
            text += " "
            self.session.switch(HintMode.MIXIN)
            keep_open = True
        else:
            self.session.reset()

        self.editor.replace_range(text, anchor, cursor)
        return keep_open

    # ------------------------------------------------------------------
    # Candidate pools
    # ------------------------------------------------------------------

    def _update_pool(self, cursor: Position, mode: HintMode, force: bool = False) -> None:
        """Rebuild the candidate pool unless one for this mode, line and cache exists."""
        if self.editor is None:
            return
        key = (mode, cursor.line, self.cache.revision)
        if not force and key == self._pool_key:
            return

        if mode is HintMode.VARIABLE:
            self._pool = self._variable_pool(self.editor, cursor)
        elif mode is HintMode.MIXIN:
            text = strip_comments(self.editor.document.get_text())
            self._pool = self.cache.mixins + extract_mixins(text).symbols
        elif mode is HintMode.FUNCTION:
            text = strip_comments(self.editor.document.get_text())
            self._pool = self.cache.functions + extract_functions(text).symbols
        else:
            self._pool = list(self.keywords)

        self._pool_key = key
        logger.debug(
            "Candidate pool for %s at line %d: %d symbols",
            mode.value,
            cursor.line,
            len(self._pool),
        )

    def _variable_pool(self, editor: Editor, cursor: Position) -> list[Symbol]:
        last_line = max(editor.last_visible_line(), cursor.line)
        flat = flatten(
            editor.get_range(Position(0, 0), cursor),
            editor.get_range(cursor, Position(last_line, None)),
        )
        scope = variable_scope(flat)
        return self.cache.variables + scope.locals + scope.globals

    def symbols(self, kind: SymbolKind) -> list[Symbol]:
        """Return every symbol of kind visible from the current document.

        Variables are the imported ones plus document globals; locals are
        position dependent and not included.
        """
        if self.editor is None:
            return []
        text = strip_comments(self.editor.document.get_text())
        if kind is SymbolKind.MIXIN:
            return self.cache.mixins + extract_mixins(text).symbols
        if kind is SymbolKind.FUNCTION:
            return self.cache.functions + extract_functions(text).symbols
        if kind is SymbolKind.KEYWORD:
            return list(self.keywords)
        return self.cache.variables + extract_variables(clear_blocks(text))

"""Symbol caches fed by the imports of the active document.

Classes:
    SymbolCache: Variables, mixins and functions contributed by imports
    ImportCacheBuilder: Rescans imports and repopulates a SymbolCache

Mutation happens at two points only: an eager clear before the per-import
tasks are started, and a single commit after all of them have finished.
Each rescan takes a generation number; a rescan that finishes after a newer
one has started discards its results.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from sass_hints.core.config import ConfigStore
from sass_hints.core.exceptions import ImportFetchError, ImportScanError
from sass_hints.host import Document, FileSystem
from sass_hints.index.builtins import builtin_functions
from sass_hints.index.imports import ImportSet, parse_imports, resolve_import
from sass_hints.scanner.comments import strip_comments
from sass_hints.scanner.extractors import extract_file_symbols
from sass_hints.scanner.types import Symbol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportedSymbols:
    """Declarations read from one resolved import."""

    import_path: str
    handle: Path
    variables: tuple[Symbol, ...]
    mixins: tuple[Symbol, ...]
    functions: tuple[Symbol, ...]


@dataclass
class SymbolCache:
    """Symbols contributed by the imports of the active document.

    Attributes:
        variables: Imported top-level variables.
        mixins: Imported mixins.
        functions: Imported functions plus built-ins when enabled.
        import_set: Import paths the cache was built from.
        handles: Resolved files of the last committed rescan.
        revision: Incremented on every clear or commit.

    """

    variables: list[Symbol] = field(default_factory=list)
    mixins: list[Symbol] = field(default_factory=list)
    functions: list[Symbol] = field(default_factory=list)
    import_set: ImportSet = field(default_factory=ImportSet)
    handles: list[Path] = field(default_factory=list)
    revision: int = 0

    def clear(self) -> None:
        """Drop all cached symbols and the recorded import set."""
        self.variables = []
        self.mixins = []
        self.functions = []
        self.import_set = ImportSet()
        self.handles = []
        self.revision += 1

    def add_builtins(self) -> None:
        """Append the built-in function table."""
        self.functions = self.functions + builtin_functions()
        self.revision += 1

    def commit(self, loaded: list[ImportedSymbols]) -> None:
        """Append the symbols of every loaded import in one step."""
        variables = list(self.variables)
        mixins = list(self.mixins)
        functions = list(self.functions)
        for item in loaded:
            variables.extend(item.variables)
            mixins.extend(item.mixins)
            functions.extend(item.functions)
        self.variables, self.mixins, self.functions = variables, mixins, functions
        self.handles = [item.handle for item in loaded]
        self.revision += 1


class ImportCacheBuilder:
    """Keeps a SymbolCache in sync with a document's @import statements.

    Args:
        cache: Cache to populate.
        fs: File layer used to resolve and read imports.
        config: Live configuration; read at the start of each rescan.

    """

    def __init__(  # noqa: D107
        self,
        cache: SymbolCache,
        fs: FileSystem,
        config: ConfigStore,
    ) -> None:
        self.cache = cache
        self._fs = fs
        self._config = config
        self._generation = 0

    @property
    def generation(self) -> int:
        """Number of the most recently started rescan."""
        return self._generation

    def reset(self) -> None:
        """Clear the cache and orphan any rescan still in flight."""
        self._generation += 1
        self.cache.clear()

    def invalidate(self) -> None:
        """Forget the recorded import set so the next rescan rebuilds."""
        self.cache.import_set = ImportSet()

    def ensure_builtins(self) -> None:
        """Add built-ins to an empty function cache when they are enabled."""
        if self._config.current.show_builtin_functions and not self.cache.functions:
            self.cache.add_builtins()

    async def rescan(self, document: Document) -> bool:
        """Rebuild the cache if the document's imports changed.

        Args:
            document: Document whose imports are scanned.

        Returns:
            True if the cache was rebuilt and committed, False if the import
            set was empty or unchanged, or this rescan was superseded.

        """
        imports = parse_imports(document.get_text())
        if not imports or imports == self.cache.import_set:
            logger.debug("Imports unchanged (%d), reusing cache", len(imports))
            return False

        self._generation += 1
        generation = self._generation
        config = self._config.current

        self.cache.clear()
        self.cache.import_set = imports
        if config.show_builtin_functions:
            self.cache.add_builtins()

        document_dir = document.path.parent if document.path is not None else None
        logger.info("Scanning %d imports (generation %d)", len(imports), generation)

        results = await asyncio.gather(
            *(
                self._load(import_path, document_dir, config.common_library_path)
                for import_path in imports.paths
            ),
            return_exceptions=True,
        )

        if generation != self._generation:
            logger.info(
                "Discarding import scan generation %d (superseded by %d)",
                generation,
                self._generation,
            )
            return False

        loaded: list[ImportedSymbols] = []
        for import_path, result in zip(imports.paths, results, strict=True):
            if isinstance(result, ImportScanError):
                logger.warning("%s", result)
            elif isinstance(result, BaseException):
                logger.warning("Unexpected error scanning import %s: %s", import_path, result)
            else:
                loaded.append(result)

        self.cache.commit(loaded)
        logger.info(
            "Import cache ready: %d/%d imports, %d variables, %d mixins, %d functions",
            len(loaded),
            len(imports),
            len(self.cache.variables),
            len(self.cache.mixins),
            len(self.cache.functions),
        )
        return True

    async def _load(
        self,
        import_path: str,
        document_dir: Path | None,
        library_root: str,
    ) -> ImportedSymbols:
        """Resolve, read and extract one import.

        Raises:
            ImportResolutionError: If the import cannot be found.
            ImportFetchError: If the file cannot be read.

        """
        handle = resolve_import(self._fs, import_path, document_dir, library_root)
        try:
            text = await self._fs.fetch_text(handle)
        except (OSError, UnicodeDecodeError) as e:
            raise ImportFetchError(f"Can't open file: {import_path}", import_path) from e

        variables, mixins, functions = extract_file_symbols(strip_comments(text), import_path)
        return ImportedSymbols(
            import_path=import_path,
            handle=handle,
            variables=tuple(variables),
            mixins=tuple(mixins),
            functions=tuple(functions),
        )

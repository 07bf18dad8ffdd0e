"""@import discovery and resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from sass_hints.core.exceptions import ImportResolutionError
from sass_hints.host import FileSystem
from sass_hints.scanner.comments import strip_comments
from sass_hints.scanner.patterns import IMPORT_PATTERN, scan

logger = logging.getLogger(__name__)

# Extensions tried for an extensionless import, in order
SUPPORTED_EXTENSIONS: tuple[str, ...] = ("scss",)

# Language ids the engine activates for
SUPPORTED_LANGUAGES: tuple[str, ...] = ("scss",)


@dataclass(frozen=True, slots=True)
class ImportSet:
    """Ordered import paths of one document, after extension expansion.

    Two sets are equal only if they hold the same paths in the same order.
    """

    paths: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.paths)

    def __len__(self) -> int:
        return len(self.paths)


def parse_imports(
    text: str,
    extensions: tuple[str, ...] = SUPPORTED_EXTENSIONS,
) -> ImportSet:
    """Collect ``@import "path";`` targets from document text.

    Comments are stripped first. A target without a file extension expands
    into one path per supported extension.

    Args:
        text: Raw document text.
        extensions: Extensions to try for extensionless targets.

    Returns:
        ImportSet in document order.

    """
    paths: list[str] = []
    for match in scan(IMPORT_PATTERN, strip_comments(text)):
        target = match.groups[1] or ""
        if PurePosixPath(target).suffix:
            paths.append(target)
        else:
            paths.extend(f"{target}.{extension}" for extension in extensions)
    return ImportSet(tuple(paths))


def _candidates(root: Path, import_path: str) -> list[Path]:
    """Return the exact path followed by its Sass partial form."""
    exact = root / import_path
    candidates = [exact]
    if not exact.name.startswith("_"):
        candidates.append(exact.with_name(f"_{exact.name}"))
    return candidates


def resolve_import(
    fs: FileSystem,
    import_path: str,
    document_dir: Path | None,
    library_root: str = "",
) -> Path:
    """Resolve an import against the document directory, then the library root.

    The library root is only consulted when the document directory yields
    nothing and the root is configured.

    Args:
        fs: File layer.
        import_path: Path as written in the import (with extension).
        document_dir: Directory of the importing document, if it has one.
        library_root: Fallback root; empty disables the fallback.

    Returns:
        Handle of the resolved file.

    Raises:
        ImportResolutionError: If no root contains the file.

    """
    roots: list[Path] = []
    if document_dir is not None:
        roots.append(document_dir)
    if library_root:
        roots.append(Path(library_root).expanduser())

    for root in roots:
        for candidate in _candidates(root, import_path):
            handle = fs.resolve(candidate)
            if handle is not None:
                logger.debug("Resolved import %s -> %s", import_path, handle)
                return handle

    raise ImportResolutionError(f"Can't find file: {import_path}", import_path)

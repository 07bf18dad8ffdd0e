"""Lexical scanning of SCSS text.

Pipeline: strip_comments() -> extract_*() / build_index() -> locate()
-> variable_scope()
"""

from sass_hints.scanner.brackets import find_matching_close
from sass_hints.scanner.comments import strip_comments
from sass_hints.scanner.extractors import (
    clear_blocks,
    extract_file_symbols,
    extract_functions,
    extract_mixins,
    extract_variables,
)
from sass_hints.scanner.scope import (
    FlattenedText,
    VariableScope,
    build_index,
    flatten,
    locate,
    resolve_locals,
    variable_scope,
)
from sass_hints.scanner.types import (
    BlockSpan,
    ExtractionResult,
    Priority,
    ScanMatch,
    Symbol,
    SymbolKind,
)

__all__ = [
    "BlockSpan",
    "ExtractionResult",
    "FlattenedText",
    "Priority",
    "ScanMatch",
    "Symbol",
    "SymbolKind",
    "VariableScope",
    "build_index",
    "clear_blocks",
    "extract_file_symbols",
    "extract_functions",
    "extract_mixins",
    "extract_variables",
    "find_matching_close",
    "flatten",
    "locate",
    "resolve_locals",
    "strip_comments",
    "variable_scope",
]

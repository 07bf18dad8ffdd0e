"""Import-driven symbol caches and static symbol tables."""

from sass_hints.index.builtins import KEYWORDS, builtin_functions, keyword_symbols
from sass_hints.index.cache import ImportCacheBuilder, ImportedSymbols, SymbolCache
from sass_hints.index.imports import (
    SUPPORTED_EXTENSIONS,
    SUPPORTED_LANGUAGES,
    ImportSet,
    parse_imports,
    resolve_import,
)

__all__ = [
    "KEYWORDS",
    "SUPPORTED_EXTENSIONS",
    "SUPPORTED_LANGUAGES",
    "ImportCacheBuilder",
    "ImportSet",
    "ImportedSymbols",
    "SymbolCache",
    "builtin_functions",
    "keyword_symbols",
    "parse_imports",
    "resolve_import",
]

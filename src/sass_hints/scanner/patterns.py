"""Declaration patterns and the restartable scanner over them.

Patterns are module-level compiled regexes. Scanning never keeps match
state on the pattern object: ``scan()`` yields matches over an immutable
text, and callers that edit the text restart the scan on the new text at an
explicit offset.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from sass_hints.scanner.types import ScanMatch

# Block comment (tolerates a missing terminator) or line comment
COMMENT_PATTERN = re.compile(r"/\*[\s\S]*?(?:\*/|\Z)|//[^\n]*")

# $name: value;  (one line, one statement; braces only inside #{...})
VARIABLE_PATTERN = re.compile(r"\$([A-Za-z0-9_\-]+):\s*((?:[^\n;{}]|#\{[^\n;{}]*\})+);")

# @mixin name(params) {   or   @mixin name {
MIXIN_PATTERN = re.compile(r"@mixin\s+([A-Za-z0-9\-_]+)\s*(?:\(([^{(]*)\))?\s*\{")

# @function name(params) {
FUNCTION_PATTERN = re.compile(r"@function\s+([A-Za-z0-9\-_]+)\s*\(([^{(]*)\)\s*\{")

# Signature of any mixin or function definition, up to its opening brace
BLOCK_PATTERN = re.compile(r"@(?:mixin|function)\s+[^{]*\{")

# $param or $param: default inside a signature
PARAMETER_PATTERN = re.compile(r"\$([\w\-]+)(?::[\t ]*([^,)\s]+))?")

# @import "path";  or  @import 'path';
IMPORT_PATTERN = re.compile(r"""@import\s*(['"])([a-zA-Z0-9_\-./]+)\1;""")

# Unfinished [$@:]word optionally followed by a partially typed word, at end of text
TOKEN_PATTERN = re.compile(r"([$@:][\w\-]*)\s*([\w\-]*)$")


def scan(pattern: re.Pattern[str], text: str, start: int = 0) -> Iterator[ScanMatch]:
    """Yield non-overlapping matches of pattern in text from start onwards.

    The sequence is finite and lazy; calling ``scan`` again with a new start
    restarts it.

    Args:
        pattern: Compiled pattern.
        text: Text to scan. Never modified.
        start: Offset to start scanning at.

    Yields:
        ScanMatch for each hit, in text order.

    """
    for match in pattern.finditer(text, start):
        yield ScanMatch(text=match.group(0), groups=match.groups(), offset=match.start())


def first_match(pattern: re.Pattern[str], text: str, start: int = 0) -> ScanMatch | None:
    """Return the first match at or after start, or None."""
    return next(scan(pattern, text, start), None)

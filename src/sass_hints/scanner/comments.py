"""Comment removal ahead of declaration scanning."""

from __future__ import annotations

import re

from sass_hints.scanner.patterns import COMMENT_PATTERN


def _blank_comment(match: re.Match[str]) -> str:
    comment = match.group(0)
    if comment.startswith("//"):
        return ""
    return "\n" * comment.count("\n")


def strip_comments(text: str, preserve_lines: bool = False) -> str:
    """Remove ``/* ... */`` and ``// ...`` comments from text.

    An unterminated block comment runs to the end of the text.

    Args:
        text: Source text.
        preserve_lines: When True, a block comment is replaced by as many
            newlines as it spanned so line numbers of the surrounding text
            do not change. Line comments are always deleted (their
            terminating newline is not part of the comment).

    Returns:
        Text without comments.

    """
    if preserve_lines:
        return COMMENT_PATTERN.sub(_blank_comment, text)
    return COMMENT_PATTERN.sub("", text)

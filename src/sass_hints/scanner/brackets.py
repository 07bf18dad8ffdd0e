"""Curly-brace matching used to delimit every block body."""

from __future__ import annotations


def find_matching_close(text: str, from_offset: int = 0) -> int:
    """Find the end of the block opened at or after from_offset.

    Only ``{`` and ``}`` are considered; strings and comments are not
    special (comments are stripped before any block scan).

    Args:
        text: Text to search.
        from_offset: Offset to start counting at.

    Returns:
        Offset just past the brace that brings the depth back to zero, or
        from_offset unchanged if the text never balances.

    """
    depth = 0
    for i in range(max(from_offset, 0), len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
    return from_offset


def block_end(text: str, head: int) -> int:
    """Return the end of the block starting at head.

    Unbalanced blocks extend to the end of the text.
    """
    end = find_matching_close(text, head)
    if end == head:
        return len(text)
    return end
